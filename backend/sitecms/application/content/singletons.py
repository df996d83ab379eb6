import copy
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Tuple, Type

from sitecms.domain.exceptions import BadRequestError, NotFoundError
from sitecms.domain.invariants.content import assert_single_document
from sitecms.extensions import db
from sitecms.models import About, Homepage
from sitecms.utils.audit import log_action

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SingletonConfig:
    name: str
    label: str
    model: Type[Any]
    defaults: Callable[[], Dict[str, Any]]

    # Sections stored as one JSON object column: {section name: column}.
    nested_sections: Dict[str, str] = field(default_factory=dict)

    # Sections that are a group of plain columns: {section name: columns}.
    flat_sections: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    # Embedded lists whose items carry their own "id".
    keyed_lists: Tuple[str, ...] = ()

    # Embedded lists addressed by position.
    indexed_lists: Tuple[str, ...] = ()


class SingletonRepository:
    """
    Homepage and About: at most one row each, created with defaults the
    first time anyone reads it.
    """

    def __init__(self, config: SingletonConfig):
        self.config = config
        self.model = config.model

    def _current(self):
        return self.model.query.order_by(self.model.created_at.asc()).first()

    def get_or_create_default(self):
        doc = self._current()
        if doc is None:
            doc = self.model(**self.config.defaults())
            db.session.add(doc)
            db.session.commit()
            logger.info("Default %s content created", self.config.label)
        return doc

    def create(self, data: Dict[str, Any], *, ctx=None):
        assert_single_document(self.model.query.count(), self.config.label)

        values = self.config.defaults()
        for key, value in copy.deepcopy(data).items():
            if key in self.config.nested_sections.values() and isinstance(value, dict):
                value = {**values.get(key, {}), **value}
            if key in self.config.keyed_lists:
                for item in value:
                    if not item.get("id"):
                        item["id"] = uuid.uuid4().hex
            values[key] = value
        doc = self.model(**values)
        db.session.add(doc)
        db.session.flush()

        self._audit(ctx, "create", doc, {"fields": sorted(data)})
        db.session.commit()
        return doc

    def section(self, name: str):
        doc = self.get_or_create_default()
        if name in self.config.nested_sections:
            return getattr(doc, self.config.nested_sections[name])
        if name in self.config.flat_sections:
            return {column: getattr(doc, column) for column in self.config.flat_sections[name]}
        raise NotFoundError(f"Unknown {self.config.label} section: {name}")

    def section_list(self, name: str):
        return self._list(self.get_or_create_default(), name)

    def patch_section(self, name: str, payload: Dict[str, Any], *, ctx=None):
        """Merge into one section; sibling sections are not touched."""
        doc = self.get_or_create_default()

        if name in self.config.nested_sections:
            column = self.config.nested_sections[name]
            merged = dict(getattr(doc, column) or {})
            merged.update(copy.deepcopy(payload))
            setattr(doc, column, merged)
        elif name in self.config.flat_sections:
            allowed = self.config.flat_sections[name]
            for key, value in payload.items():
                if key in allowed:
                    setattr(doc, key, value)
        else:
            raise NotFoundError(f"Unknown {self.config.label} section: {name}")

        self._audit(ctx, f"{name}.update", doc, {"fields": sorted(payload)})
        db.session.commit()
        return doc

    def update(self, changes: Dict[str, Any], *, ctx=None):
        """Patch any top-level field."""
        doc = self.get_or_create_default()
        columns = set(self.model.__table__.columns.keys()) - {"id", "created_at", "updated_at"}

        for key, value in changes.items():
            if key not in columns:
                continue
            value = copy.deepcopy(value)
            if key in self.config.keyed_lists:
                for item in value:
                    item.setdefault("id", uuid.uuid4().hex)
            setattr(doc, key, value)

        self._audit(ctx, "update", doc, {"fields": sorted(changes)})
        db.session.commit()
        return doc

    # ------------------------
    # Embedded lists
    # ------------------------

    def _list(self, doc, name):
        if name not in self.config.keyed_lists + self.config.indexed_lists:
            raise NotFoundError(f"Unknown {self.config.label} list: {name}")
        return [dict(item) for item in getattr(doc, name) or []]

    def replace_list(self, name: str, items, *, ctx=None):
        doc = self.get_or_create_default()
        self._list(doc, name)

        fresh = []
        for item in copy.deepcopy(items):
            if name in self.config.keyed_lists and not item.get("id"):
                item["id"] = uuid.uuid4().hex
            fresh.append(item)
        setattr(doc, name, fresh)

        self._audit(ctx, f"{name}.replace", doc, {"count": len(fresh)})
        db.session.commit()
        return fresh

    def upsert_item(self, name: str, item: Dict[str, Any], *, ctx=None):
        """
        Replace in place when ``id`` matches an existing entry, otherwise
        append. Indexed lists always append.
        """
        doc = self.get_or_create_default()
        items = self._list(doc, name)
        item = copy.deepcopy(item)

        if name in self.config.keyed_lists:
            item_id = item.get("id")
            position = next(
                (i for i, existing in enumerate(items) if item_id and existing.get("id") == item_id),
                None,
            )
            if position is None:
                item["id"] = item_id or uuid.uuid4().hex
                items.append(item)
            else:
                items[position] = item
        else:
            item.pop("id", None)
            items.append(item)

        setattr(doc, name, items)
        self._audit(ctx, f"{name}.upsert", doc, {"id": item.get("id")})
        db.session.commit()
        return item

    def delete_item(self, name: str, item_id: str, *, ctx=None):
        doc = self.get_or_create_default()
        items = self._list(doc, name)

        remaining = [item for item in items if item.get("id") != item_id]
        if len(remaining) == len(items):
            raise NotFoundError("Item not found")

        setattr(doc, name, remaining)
        self._audit(ctx, f"{name}.delete", doc, {"id": item_id})
        db.session.commit()
        return remaining

    def delete_item_at(self, name: str, index, *, ctx=None):
        doc = self.get_or_create_default()
        items = self._list(doc, name)

        try:
            index = int(index)
        except (TypeError, ValueError) as exc:
            raise BadRequestError("Invalid index") from exc
        if index < 0 or index >= len(items):
            raise BadRequestError("Invalid index")

        del items[index]
        setattr(doc, name, items)
        self._audit(ctx, f"{name}.delete", doc, {"index": index})
        db.session.commit()
        return items

    def _audit(self, ctx, action, doc, payload):
        log_action(
            actor=ctx,
            action=f"{self.config.name}.{action}",
            entity_type=self.config.name,
            entity_id=doc.id,
            payload=payload,
        )
        if ctx is not None:
            logger.info("%s %s by %s", self.config.label, action, ctx.email)


def homepage_defaults():
    return {
        "hero": {
            "title": "30+ Years of",
            "titleHighlight": "Engineering Excellence",
            "subtitle": "Specialized Construction Solutions & Engineering Services",
            "images": [],
            "buttons": [
                {"id": "1", "label": "View Services", "route": "/services", "variant": "primary"},
                {"id": "2", "label": "Request Consultation", "route": "/request-quote", "variant": "outline"},
            ],
        },
        "about": {
            "subtitle": "ABOUT US",
            "title": "Building Trust for Three Decades",
            "description1": "",
            "description2": "",
            "image": "",
            "managingDirector": "",
        },
        "services": [
            {"id": "1", "title": "Deep Foundation", "description": "Pile foundation and deep excavation works", "icon": "Hammer"},
            {"id": "2", "title": "Structural Works", "description": "Complete structural engineering solutions", "icon": "Building2"},
            {"id": "3", "title": "Earth Retention", "description": "Shoring and retaining systems", "icon": "Mountain"},
        ],
        "contact_cta": {
            "heading": "Ready to Start Your Project?",
            "subheading": "Get a free site inspection and consultation from our engineers",
            "phone": "",
            "email": "",
        },
    }


def about_defaults():
    return {
        "hero_title": "About Us",
        "hero_subtitle": "Building infrastructure with precision",
        "mission": "To deliver engineering and construction solutions that exceed client expectations "
                   "while keeping to the highest standards of safety and quality.",
        "vision": "To be recognized as a leading engineering and construction company, "
                  "known for innovation and reliability.",
        "history": "",
        "values": [],
        "team": [],
        "stats": [],
    }


HOMEPAGE = SingletonRepository(SingletonConfig(
    name="homepage",
    label="Homepage",
    model=Homepage,
    defaults=homepage_defaults,
    nested_sections={"hero": "hero", "about": "about", "contact-cta": "contact_cta"},
    keyed_lists=("services",),
))

ABOUT = SingletonRepository(SingletonConfig(
    name="about",
    label="About",
    model=About,
    defaults=about_defaults,
    flat_sections={
        "main": ("hero_title", "hero_subtitle", "mission", "vision"),
        "story": ("history", "story_title", "story_image", "founded_year", "experience", "completed_projects"),
        "leadership": ("director_name", "director_position", "director_experience", "director_bio"),
    },
    keyed_lists=("team", "values"),
    indexed_lists=("stats",),
))
