from flask import request

from sitecms.application.content.leads import CONTACTS, QUOTES
from sitecms.normalizers.document import normalize_document, normalize_lead_receipt
from sitecms.schemas.leads import ContactInput, LeadStatusInput, QuoteInput
from sitecms.utils.decorators import admin_required
from sitecms.utils.responses import success
from .helpers import page_args, parse_body
from . import api_bp

_RECEIVED = {
    "contact": "Thank you for contacting us. We will get back to you soon.",
    "quote": "Quote request submitted successfully. We will contact you shortly.",
}


def register_lead_routes(bp, prefix, repository, schema):
    base = f"/{prefix}"
    kind = repository.config.kind
    label = repository.config.label

    def route(rule, endpoint, view, methods, gated=True):
        bp.add_url_rule(
            rule,
            endpoint=f"{prefix}_{endpoint}",
            view_func=admin_required(view) if gated else view,
            methods=methods,
        )

    def submit():
        doc = repository.create(parse_body(schema).changes())
        return success(normalize_lead_receipt(doc), message=_RECEIVED[kind], status=201)

    def list_all(ctx):
        page, limit = page_args(default_limit=50)
        filters = {
            "status": request.args.get("status", "").lower(),
            "service_type": request.args.get("serviceType", "").lower(),
        }
        docs, meta = repository.list_admin(filters, page=page, limit=limit)
        return success(
            [normalize_document(doc) for doc in docs],
            count=len(docs),
            **meta,
        )

    def stats(ctx):
        return success(repository.stats())

    def get_one(ctx, doc_id):
        return success(normalize_document(repository.get(doc_id)))

    def set_status(ctx, doc_id):
        body = parse_body(LeadStatusInput)
        doc = repository.set_status(doc_id, body.status, ctx=ctx)
        return success(normalize_document(doc), message=f"{label} status updated")

    def delete(ctx, doc_id):
        repository.delete(doc_id, ctx=ctx)
        return success(message=f"{label} deleted successfully")

    route(base, "submit", submit, ["POST"], gated=False)
    route(base, "list_all", list_all, ["GET"])
    route(f"{base}/stats", "stats", stats, ["GET"])
    route(f"{base}/<doc_id>", "get_one", get_one, ["GET"])
    route(f"{base}/<doc_id>/status", "set_status", set_status, ["PATCH"])
    route(f"{base}/<doc_id>", "delete", delete, ["DELETE"])


register_lead_routes(api_bp, "contacts", CONTACTS, ContactInput)
register_lead_routes(api_bp, "quotes", QUOTES, QuoteInput)
