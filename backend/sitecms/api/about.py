from sitecms.application.content.singletons import ABOUT
from sitecms.normalizers.document import normalize_document
from sitecms.schemas.singletons import (
    AboutInput,
    AboutLeadershipInput,
    AboutMainInput,
    AboutStatInput,
    AboutStoryInput,
    AboutValueInput,
    TeamMemberInput,
)
from sitecms.utils.decorators import admin_required
from sitecms.utils.responses import listing, success
from .helpers import parse_body
from . import api_bp

SECTION_SCHEMAS = {
    "main": AboutMainInput,
    "story": AboutStoryInput,
    "leadership": AboutLeadershipInput,
}

LIST_SCHEMAS = {
    "team": TeamMemberInput,
    "values": AboutValueInput,
}


@api_bp.route("/about", methods=["GET"])
def get_about():
    return success(normalize_document(ABOUT.get_or_create_default()))


@api_bp.route("/about", methods=["POST"])
@admin_required
def create_about(ctx):
    doc = ABOUT.create(parse_body(AboutInput).changes(), ctx=ctx)
    return success(normalize_document(doc), message="About content created successfully", status=201)


@api_bp.route("/about", methods=["PUT"])
@admin_required
def update_about(ctx):
    doc = ABOUT.update(parse_body(AboutInput).changes(), ctx=ctx)
    return success(normalize_document(doc), message="About content updated successfully")


@api_bp.route("/about/<any(main, story, leadership):section>", methods=["PATCH"])
@admin_required
def update_about_section(ctx, section):
    payload = parse_body(SECTION_SCHEMAS[section]).changes()
    doc = ABOUT.patch_section(section, payload, ctx=ctx)
    return success(normalize_document(doc), message=f"About {section} section updated")


@api_bp.route("/about/<any(team, values):list_name>", methods=["POST"])
@admin_required
def upsert_about_item(ctx, list_name):
    item = parse_body(LIST_SCHEMAS[list_name]).model_dump(by_alias=True, exclude_none=True)
    saved = ABOUT.upsert_item(list_name, item, ctx=ctx)
    return success(saved, message=f"About {list_name} entry saved")


@api_bp.route("/about/<any(team, values):list_name>/<item_id>", methods=["DELETE"])
@admin_required
def delete_about_item(ctx, list_name, item_id):
    items = ABOUT.delete_item(list_name, item_id, ctx=ctx)
    return listing(items, message=f"About {list_name} entry deleted")


@api_bp.route("/about/stats", methods=["POST"])
@admin_required
def add_about_stat(ctx):
    item = parse_body(AboutStatInput).model_dump(by_alias=True, exclude_none=True)
    saved = ABOUT.upsert_item("stats", item, ctx=ctx)
    return success(saved, message="About stat added")


@api_bp.route("/about/stats/<int:index>", methods=["DELETE"])
@admin_required
def delete_about_stat(ctx, index):
    items = ABOUT.delete_item_at("stats", index, ctx=ctx)
    return listing(items, message="About stat deleted")
