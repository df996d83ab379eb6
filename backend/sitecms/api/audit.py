from flask import request

from sitecms.models.audit_log import AuditLog
from sitecms.normalizers.audit import normalize_audit_log
from sitecms.utils.decorators import admin_required, roles_required
from sitecms.utils.pagination import MAX_CURSOR_LIMIT, paginate_cursor, parse_positive_int
from sitecms.utils.responses import success
from . import api_bp


@api_bp.route("/audit", methods=["GET"])
@admin_required
@roles_required("admin")
def list_audit_logs(ctx):
    limit = parse_positive_int(
        request.args.get("limit"), default=20, name="limit", maximum=MAX_CURSOR_LIMIT
    )

    query = AuditLog.query

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    logs, meta = paginate_cursor(
        query,
        model=AuditLog,
        cursor=request.args.get("cursor"),
        limit=limit,
    )

    return success(
        [normalize_audit_log(log) for log in logs],
        count=len(logs),
        meta=meta,
    )
