from sitecms.application.content.singletons import HOMEPAGE
from sitecms.normalizers.document import normalize_document
from sitecms.schemas.singletons import (
    ContactCTASection,
    HeroSection,
    HomeAboutSection,
    HomepageInput,
    HomeServiceItem,
    HomeServicesInput,
)
from sitecms.utils.decorators import admin_required
from sitecms.utils.responses import listing, success
from .helpers import parse_body
from . import api_bp

SECTION_SCHEMAS = {
    "hero": HeroSection,
    "about": HomeAboutSection,
    "contact-cta": ContactCTASection,
}


# ------------------------
# Public
# ------------------------

@api_bp.route("/home", methods=["GET"])
def get_homepage():
    return success(normalize_document(HOMEPAGE.get_or_create_default()))


@api_bp.route("/home/services", methods=["GET"])
def get_home_services():
    return listing(HOMEPAGE.section_list("services"))


@api_bp.route("/home/<any(hero, about, 'contact-cta'):section>", methods=["GET"])
def get_home_section(section):
    return success(HOMEPAGE.section(section))


# ------------------------
# Admin
# ------------------------

@api_bp.route("/admin/home", methods=["GET"])
@admin_required
def admin_get_homepage(ctx):
    return success(normalize_document(HOMEPAGE.get_or_create_default()))


@api_bp.route("/admin/home", methods=["POST"])
@admin_required
def admin_create_homepage(ctx):
    doc = HOMEPAGE.create(parse_body(HomepageInput).changes(), ctx=ctx)
    return success(
        normalize_document(doc),
        message="Homepage content created successfully",
        status=201,
    )


@api_bp.route("/admin/home/<any(hero, about, 'contact-cta'):section>", methods=["PUT"])
@admin_required
def admin_update_home_section(ctx, section):
    payload = parse_body(SECTION_SCHEMAS[section]).changes(by_alias=True)
    doc = HOMEPAGE.patch_section(section, payload, ctx=ctx)
    return success(normalize_document(doc), message=f"Homepage {section} section updated")


@api_bp.route("/admin/home/services", methods=["PUT"])
@admin_required
def admin_replace_home_services(ctx):
    body = parse_body(HomeServicesInput)
    items = [item.model_dump(by_alias=True, exclude_none=True) for item in body.services]
    services = HOMEPAGE.replace_list("services", items, ctx=ctx)
    return listing(services, message="Homepage services updated")


@api_bp.route("/admin/home/services", methods=["POST"])
@admin_required
def admin_upsert_home_service(ctx):
    item = parse_body(HomeServiceItem).model_dump(by_alias=True, exclude_none=True)
    saved = HOMEPAGE.upsert_item("services", item, ctx=ctx)
    return success(saved, message="Homepage service saved")


@api_bp.route("/admin/home/services/<item_id>", methods=["DELETE"])
@admin_required
def admin_delete_home_service(ctx, item_id):
    services = HOMEPAGE.delete_item("services", item_id, ctx=ctx)
    return listing(services, message="Homepage service deleted")
