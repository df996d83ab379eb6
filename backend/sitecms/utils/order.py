import logging

from sqlalchemy.exc import SQLAlchemyError

from sitecms.extensions import db

logger = logging.getLogger(__name__)


def apply_order_pairs(model, pairs, order_field="order"):
    """
    Apply ``[{"id": ..., "order": ...}]`` one pair at a time, each inside
    its own savepoint. A failing pair leaves the others applied.

    Returns (applied_ids, failed_ids). Unknown ids are in neither list.
    """
    column = getattr(model, order_field)
    applied, failed = [], []

    for pair in pairs:
        try:
            with db.session.begin_nested():
                updated = (
                    model.query
                    .filter_by(id=pair["id"])
                    .update({column: pair["order"]}, synchronize_session=False)
                )
        except SQLAlchemyError as exc:
            logger.error("Reorder of %s %s failed: %s", model.__tablename__, pair["id"], exc)
            failed.append(pair["id"])
            continue

        if updated:
            applied.append(pair["id"])

    db.session.commit()
    return applied, failed
