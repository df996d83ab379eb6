"""
Route factory for collection content types.

Each call wires the same verb/path table onto the blueprint for one
resource. Literal paths (``/admin/all``, ``/reorder``) are registered ahead
of the ``/<identifier>`` catch-all.
"""
from flask import request

from sitecms.normalizers.document import normalize_document
from sitecms.schemas.content import ReorderInput
from sitecms.utils.decorators import admin_required
from sitecms.utils.responses import listing, success
from .helpers import parse_body


def register_content_routes(bp, prefix, repository, schema, *, by_category=False, related=False):
    config = repository.config
    base = f"/{prefix}"
    name = prefix.replace("-", "_")
    label = config.label

    def route(rule, endpoint, view, methods, gated=False):
        bp.add_url_rule(
            rule,
            endpoint=f"{name}_{endpoint}",
            view_func=admin_required(view) if gated else view,
            methods=methods,
        )

    # ------------------------
    # Admin reads
    # ------------------------

    def list_admin(ctx):
        docs = repository.list_admin(request.args.to_dict())
        return listing([normalize_document(doc) for doc in docs])

    def get_admin_one(ctx, doc_id):
        return success(normalize_document(repository.get_admin_one(doc_id)))

    route(f"{base}/admin/all", "list_admin", list_admin, ["GET"], gated=True)
    route(f"{base}/admin/<doc_id>", "get_admin_one", get_admin_one, ["GET"], gated=True)

    if config.ordered:
        def reorder(ctx):
            pairs = parse_body(ReorderInput).pairs()
            docs = repository.reorder(pairs, ctx=ctx)
            return listing(
                [normalize_document(doc) for doc in docs],
                message=f"{label} items reordered successfully",
            )

        route(f"{base}/reorder", "reorder", reorder, ["PATCH"], gated=True)

    # ------------------------
    # Public reads
    # ------------------------

    if by_category:
        def list_by_category(category):
            docs = repository.list_public({"category": category})
            return listing([normalize_document(doc) for doc in docs])

        route(f"{base}/category/<category>", "list_by_category", list_by_category, ["GET"])

    def list_public():
        docs = repository.list_public(request.args.to_dict())
        return listing([normalize_document(doc) for doc in docs])

    def get_public_one(identifier):
        return success(normalize_document(repository.get_public_one(identifier)))

    route(base, "list_public", list_public, ["GET"])
    route(f"{base}/<identifier>", "get_public_one", get_public_one, ["GET"])

    if related:
        def list_related(doc_id):
            docs = repository.related(doc_id)
            return listing([normalize_document(doc) for doc in docs])

        route(f"{base}/<doc_id>/related", "list_related", list_related, ["GET"])

    # ------------------------
    # Admin writes
    # ------------------------

    def create(ctx):
        doc = repository.create(parse_body(schema).changes(), ctx=ctx)
        return success(
            normalize_document(doc),
            message=f"{label} created successfully",
            status=201,
        )

    def update(ctx, doc_id):
        doc = repository.update(doc_id, parse_body(schema).changes(), ctx=ctx)
        return success(normalize_document(doc), message=f"{label} updated successfully")

    def delete(ctx, doc_id):
        repository.delete(doc_id, ctx=ctx)
        return success(message=f"{label} deleted successfully")

    route(base, "create", create, ["POST"], gated=True)
    route(f"{base}/<doc_id>", "update", update, ["PUT"], gated=True)
    route(f"{base}/<doc_id>", "delete", delete, ["DELETE"], gated=True)

    for column in config.toggles:
        flag = "active" if column in ("active", "is_active") else column

        def toggle(ctx, doc_id, column=column, flag=flag):
            doc = repository.toggle(doc_id, column, ctx=ctx)
            state = "on" if getattr(doc, column) else "off"
            return success(
                normalize_document(doc),
                message=f"{label} {flag} switched {state}",
            )

        route(f"{base}/<doc_id>/toggle-{flag}", f"toggle_{flag}", toggle, ["PATCH"], gated=True)
