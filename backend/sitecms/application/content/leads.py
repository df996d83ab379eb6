import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple, Type

from sqlalchemy import func

from sitecms.domain.exceptions import NotFoundError
from sitecms.domain.invariants.content import assert_required
from sitecms.domain.lifecycle.lead import LEAD_STATUSES, assert_lead_status
from sitecms.extensions import db
from sitecms.models import Contact, Quote
from sitecms.utils.audit import log_action
from sitecms.utils.pagination import paginate_offset
from sitecms.utils.transaction import transactional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeadTypeConfig:
    kind: str
    label: str
    model: Type[Any]
    required: Tuple[str, ...]
    filters: Tuple[str, ...] = ("status",)


class LeadRepository:
    """
    Contact and quote submissions. The public can only create them; after
    that only their status moves.
    """

    def __init__(self, config: LeadTypeConfig):
        self.config = config
        self.model = config.model

    def create(self, data: Dict[str, Any]):
        assert_required(data, self.config.required)

        doc = self.model()
        for key, value in data.items():
            setattr(doc, key, value)
        doc.status = "new"

        db.session.add(doc)
        db.session.commit()

        logger.info("New %s submission from %s", self.config.kind, doc.email)
        return doc

    def list_admin(self, filters: Dict[str, Any], *, page: int, limit: int):
        query = self.model.query
        for column in self.config.filters:
            value = filters.get(column)
            if value:
                query = query.filter(getattr(self.model, column) == value)

        query = query.order_by(self.model.created_at.desc())
        return paginate_offset(query, page=page, limit=limit)

    def get(self, doc_id):
        doc = db.session.get(self.model, doc_id)
        if doc is None:
            raise NotFoundError(f"{self.config.label} not found")
        return doc

    def stats(self) -> Dict[str, int]:
        counts = dict(
            db.session.query(self.model.status, func.count(self.model.id))
            .group_by(self.model.status)
            .all()
        )
        result = {"total": sum(counts.values())}
        for status in LEAD_STATUSES[self.config.kind]:
            result[status] = counts.get(status, 0)
        return result

    def set_status(self, doc_id, status, *, ctx=None):
        status = assert_lead_status(kind=self.config.kind, status=status)
        doc = self.get(doc_id)

        with transactional(f"{self.config.kind}.status"):
            previous, doc.status = doc.status, status
            log_action(
                actor=ctx,
                action=f"{self.config.kind}.status",
                entity_type=self.config.kind,
                entity_id=doc.id,
                payload={"from": previous, "to": status},
            )

        if ctx is not None:
            logger.info("%s %s marked %s by %s", self.config.label, doc.id, status, ctx.email)
        return doc

    def delete(self, doc_id, *, ctx=None):
        doc = self.get(doc_id)
        with transactional(f"{self.config.kind}.delete") as session:
            session.delete(doc)
            log_action(
                actor=ctx,
                action=f"{self.config.kind}.delete",
                entity_type=self.config.kind,
                entity_id=doc_id,
            )


CONTACTS = LeadRepository(LeadTypeConfig(
    kind="contact",
    label="Contact",
    model=Contact,
    required=("name", "phone", "email", "service_type", "message"),
))

QUOTES = LeadRepository(LeadTypeConfig(
    kind="quote",
    label="Quote",
    model=Quote,
    required=("name", "phone", "email", "service_type", "description", "address"),
    filters=("status", "service_type"),
))
