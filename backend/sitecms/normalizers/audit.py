# sitecms/normalizers/audit.py
from __future__ import annotations

from typing import Dict, Any
from sitecms.models.audit_log import AuditLog


def normalize_audit_log(log: AuditLog) -> Dict[str, Any]:
    """
    entity_id is always a string; payload is stored JSON.
    """
    if not log:
        raise ValueError("AuditLog cannot be None")

    return {
        "_id": log.id,
        "actorId": log.actor_id,
        "action": log.action,
        "entityType": log.entity_type,
        "entityId": str(log.entity_id) if log.entity_id is not None else None,
        "payload": log.payload or {},
        "createdAt": log.created_at.isoformat(),
    }
