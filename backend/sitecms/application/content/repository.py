import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Type

from sitecms.domain.exceptions import BadRequestError, InternalError, NotFoundError
from sitecms.domain.invariants.content import assert_required
from sitecms.extensions import db, media
from sitecms.utils.audit import log_action
from sitecms.utils.media import fill_transform, is_data_uri_image
from sitecms.utils.order import apply_order_pairs
from sitecms.utils.slug import make_slug
from sitecms.utils.transaction import transactional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageSpec:
    folder: str
    width: int
    height: int

    @property
    def transform(self):
        return fill_transform(self.width, self.height)


@dataclass(frozen=True)
class ContentTypeConfig:
    """
    Everything that differs between two collection types. The repository
    below is the same code for all of them.
    """

    name: str
    label: str
    model: Type[Any]
    required: Tuple[str, ...]

    # Columns that must all be True for a public read to see a document.
    visibility: Tuple[str, ...] = ()
    toggles: Tuple[str, ...] = ()

    # Query-string filters honoured on list reads: {query key: column}.
    filters: Dict[str, str] = field(default_factory=dict)
    # Filters whose values are stored lower-case, so the query value is folded too.
    folded_filters: Tuple[str, ...] = ()

    public_order: Callable[[Any], Sequence[Any]] = None
    admin_order: Callable[[Any], Sequence[Any]] = None

    slugged: bool = False
    ordered: bool = False
    counts_views: bool = False

    image: Optional[ImageSpec] = None
    gallery: Optional[ImageSpec] = None

    # Derive extra fields from the incoming changes, e.g. read time.
    prepare: Optional[Callable[[Any, Dict[str, Any], bool], None]] = None


def newest_first(model):
    return (model.created_at.desc(),)


def by_order(model):
    return (model.order.asc(), model.created_at.asc())


class ContentRepository:
    def __init__(self, config: ContentTypeConfig):
        self.config = config
        self.model = config.model

    # ------------------------
    # Reads
    # ------------------------

    def _filtered(self, filters: Optional[Dict[str, Any]]):
        query = self.model.query
        for key, value in (filters or {}).items():
            column = self.config.filters.get(key)
            if column is None or value in (None, "", "All", "all"):
                continue
            if key in self.config.folded_filters:
                value = value.lower()
            query = query.filter(getattr(self.model, column) == value)
        return query

    def _visible(self, query):
        for column in self.config.visibility:
            query = query.filter(getattr(self.model, column).is_(True))
        return query

    def _ordered(self, query, public: bool):
        order = self.config.public_order if public else self.config.admin_order
        order = order or self.config.public_order or (by_order if self.config.ordered else newest_first)
        return query.order_by(*order(self.model))

    def list_public(self, filters=None):
        query = self._visible(self._filtered(filters))
        return self._ordered(query, public=True).all()

    def list_admin(self, filters=None):
        return self._ordered(self._filtered(filters), public=False).all()

    def _resolve(self, identifier, query=None):
        query = query if query is not None else self.model.query
        doc = query.filter(self.model.id == identifier).first()
        if doc is None and self.config.slugged:
            doc = query.filter(self.model.slug == identifier).first()
        return doc

    def get_public_one(self, identifier):
        doc = self._resolve(identifier, self._visible(self.model.query))
        if doc is None:
            raise NotFoundError(f"{self.config.label} not found")

        if self.config.counts_views:
            # Single UPDATE so concurrent reads never lose an increment.
            self.model.query.filter_by(id=doc.id).update(
                {self.model.views: self.model.views + 1},
                synchronize_session=False,
            )
            db.session.commit()

        return doc

    def get_admin_one(self, doc_id):
        doc = self._resolve(doc_id)
        if doc is None:
            raise NotFoundError(f"{self.config.label} not found")
        return doc

    def related(self, doc_id, *, on="category", limit=3):
        doc = self._resolve(doc_id, self._visible(self.model.query))
        if doc is None:
            raise NotFoundError(f"{self.config.label} not found")

        query = self._visible(self.model.query).filter(
            getattr(self.model, on) == getattr(doc, on),
            self.model.id != doc.id,
        )
        return self._ordered(query, public=True).limit(limit).all()

    # ------------------------
    # Media helpers
    # ------------------------

    @staticmethod
    def _check_images(images, label):
        invalid = [image for image in images if not is_data_uri_image(image)]
        if invalid:
            raise BadRequestError(f"{len(invalid)} {label}(s) have invalid format")

    def _upload_gallery(self, images):
        spec = self.config.gallery
        assets = media.store_many(images, folder=spec.folder, transform=spec.transform)
        return [{"url": asset["url"], "publicId": asset["public_id"]} for asset in assets]

    def _media_handles(self, doc):
        handles = []
        if self.config.image:
            handles.append(doc.image_public_id or media.derive_handle_from_url(doc.image))
        if self.config.gallery:
            for item in doc.gallery or []:
                handles.append(item.get("publicId") or media.derive_handle_from_url(item.get("url")))
        return [handle for handle in handles if handle]

    # ------------------------
    # Writes
    # ------------------------

    def _apply(self, doc, changes):
        for key, value in changes.items():
            # JSON columns only notice reassignment
            setattr(doc, key, copy.deepcopy(value))

    def create(self, data: Dict[str, Any], *, ctx=None):
        config = self.config
        data = dict(data)
        assert_required(data, config.required)

        image = data.pop("image", None) if config.image else None
        gallery = data.pop("gallery", None) if config.gallery else None

        if image is not None and not is_data_uri_image(image):
            raise BadRequestError("Invalid main image format")
        if gallery:
            self._check_images(gallery, "gallery image")

        doc = self.model()
        self._apply(doc, data)

        if config.slugged:
            doc.slug = make_slug(doc.title)
        if config.prepare:
            config.prepare(doc, data, True)

        # Uploads happen before the row is written; a failed write orphans them.
        if image is not None:
            asset = media.store(image, folder=config.image.folder, transform=config.image.transform)
            doc.image = asset["url"]
            doc.image_public_id = asset["public_id"]
        if gallery:
            doc.gallery = self._upload_gallery(gallery)

        db.session.add(doc)
        db.session.flush()

        log_action(
            actor=ctx,
            action=f"{config.name}.create",
            entity_type=config.name,
            entity_id=doc.id,
            payload={"fields": sorted(data)},
        )
        db.session.commit()

        if ctx is not None:
            logger.info("%s created by %s: %s", config.label, ctx.email, doc.id)
        return doc

    def update(self, doc_id, changes: Dict[str, Any], *, ctx=None):
        config = self.config
        doc = self.get_admin_one(doc_id)
        changes = dict(changes)

        image = changes.pop("image", None) if config.image else None
        gallery = changes.pop("gallery", None) if config.gallery else None

        if image is not None and image == doc.image:
            image = None
        if image is not None and not is_data_uri_image(image):
            raise BadRequestError("Invalid main image format")
        if gallery:
            self._check_images(gallery, "gallery image")

        self._apply(doc, changes)

        if config.slugged and "title" in changes:
            doc.slug = make_slug(doc.title)
        if config.prepare:
            config.prepare(doc, changes, False)

        stale = []
        if image is not None:
            asset = media.store(image, folder=config.image.folder, transform=config.image.transform)
            stale.append(doc.image_public_id or media.derive_handle_from_url(doc.image))
            doc.image = asset["url"]
            doc.image_public_id = asset["public_id"]
            changes["image"] = asset["url"]

        if gallery is not None:
            new_gallery = self._upload_gallery(gallery) if gallery else []
            stale.extend(
                item.get("publicId") or media.derive_handle_from_url(item.get("url"))
                for item in doc.gallery or []
            )
            doc.gallery = new_gallery
            changes["gallery"] = new_gallery

        # Old assets go only once their replacements exist.
        for handle in stale:
            media.remove_quietly(handle)

        log_action(
            actor=ctx,
            action=f"{config.name}.update",
            entity_type=config.name,
            entity_id=doc.id,
            payload={"fields": sorted(changes)},
        )
        db.session.commit()

        if ctx is not None:
            logger.info("%s updated by %s: %s", config.label, ctx.email, doc.id)
        return doc

    def delete(self, doc_id, *, ctx=None):
        config = self.config
        doc = self.get_admin_one(doc_id)

        for handle in self._media_handles(doc):
            media.remove_quietly(handle)

        with transactional(f"{config.name}.delete") as session:
            session.delete(doc)
            log_action(
                actor=ctx,
                action=f"{config.name}.delete",
                entity_type=config.name,
                entity_id=doc_id,
            )

        if ctx is not None:
            logger.info("%s deleted by %s: %s", config.label, ctx.email, doc_id)

    def toggle(self, doc_id, column: str, *, ctx=None):
        if column not in self.config.toggles:
            raise BadRequestError(f"{self.config.label} has no {column} flag")

        doc = self.get_admin_one(doc_id)
        value = not getattr(doc, column)

        with transactional(f"{self.config.name}.toggle"):
            setattr(doc, column, value)
            log_action(
                actor=ctx,
                action=f"{self.config.name}.toggle",
                entity_type=self.config.name,
                entity_id=doc.id,
                payload={column: value},
            )
        return doc

    def reorder(self, pairs, *, ctx=None):
        """
        Not atomic: each pair commits on its own. Any failed pair turns the
        whole call into a 500.
        """
        if not self.config.ordered:
            raise BadRequestError(f"{self.config.label} does not support ordering")
        if not pairs:
            raise BadRequestError("Please provide items to reorder")

        applied, failed = apply_order_pairs(self.model, pairs)

        if applied:
            log_action(
                actor=ctx,
                action=f"{self.config.name}.reorder",
                entity_type=self.config.name,
                entity_id=None,
                payload={"ids": applied},
            )
            db.session.commit()

        if failed:
            logger.error("%s reorder failed for ids: %s", self.config.label, ", ".join(failed))
            raise InternalError(f"Failed to reorder {self.config.name} items")

        return self.list_admin()
