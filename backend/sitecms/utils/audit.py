from typing import Optional

from sitecms.extensions import db
from sitecms.models.audit_log import AuditLog


def log_action(
    *,
    actor,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    """
    Stage an audit row in the current session. The caller's commit
    persists it together with the write it describes.
    """
    if actor is None:
        return

    log = AuditLog()

    log.actor_id = actor.actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = str(entity_id) if entity_id is not None else None
    log.payload = payload or {}

    db.session.add(log)
