import math
import re

from sitecms.models import FAQ, Blog, Project, Service, Testimonial, TrustedBy
from sitecms.schemas.content import (
    BlogInput,
    FAQInput,
    ProjectInput,
    ServiceInput,
    TestimonialInput,
    TrustedByInput,
)
from .repository import ContentRepository, ContentTypeConfig, ImageSpec, by_order, newest_first

WORDS_PER_MINUTE = 200
_TAG_PATTERN = re.compile(r"<[^>]*>")


def estimate_read_time(content: str) -> str:
    words = len(_TAG_PATTERN.sub(" ", content or "").split())
    return f"{max(1, math.ceil(words / WORDS_PER_MINUTE))} min"


def prepare_blog(doc, changes, creating):
    if "read_time" in changes:
        return
    if creating or "content" in changes:
        doc.read_time = estimate_read_time(doc.content)


BLOG = ContentTypeConfig(
    name="blog",
    label="Blog",
    model=Blog,
    required=("title", "excerpt", "content", "category", "image"),
    visibility=("published", "is_active"),
    toggles=("is_active", "published"),
    filters={"category": "category"},
    public_order=lambda m: (m.date.desc(), m.created_at.desc()),
    admin_order=newest_first,
    slugged=True,
    counts_views=True,
    image=ImageSpec("blog", 1200, 630),
    prepare=prepare_blog,
)

PROJECT = ContentTypeConfig(
    name="project",
    label="Project",
    model=Project,
    required=("title", "category", "location", "year", "client", "description", "image"),
    visibility=("is_active",),
    toggles=("is_active",),
    filters={"category": "category"},
    public_order=newest_first,
    image=ImageSpec("projects", 1200, 800),
    gallery=ImageSpec("projects/gallery", 1200, 800),
)

SERVICE = ContentTypeConfig(
    name="service",
    label="Service",
    model=Service,
    required=("title", "description", "image"),
    visibility=("is_active",),
    toggles=("is_active",),
    slugged=True,
    ordered=True,
    image=ImageSpec("services", 800, 600),
)

FAQ_TYPE = ContentTypeConfig(
    name="faq",
    label="FAQ",
    model=FAQ,
    required=("question", "answer"),
    visibility=("active",),
    toggles=("active",),
    filters={"category": "category"},
    folded_filters=("category",),
    public_order=by_order,
    admin_order=lambda m: (m.category.asc(), m.order.asc(), m.created_at.asc()),
    ordered=True,
)

TESTIMONIAL = ContentTypeConfig(
    name="testimonial",
    label="Testimonial",
    model=Testimonial,
    required=("name", "position", "company", "testimonial"),
    visibility=("active",),
    toggles=("active",),
    ordered=True,
)

TRUSTED_BY = ContentTypeConfig(
    name="trusted_by",
    label="Company",
    model=TrustedBy,
    required=("name", "logo"),
    visibility=("active",),
    toggles=("active",),
    ordered=True,
)

# url prefix -> (repository, request schema)
CONTENT_TYPES = {
    "blogs": (ContentRepository(BLOG), BlogInput),
    "projects": (ContentRepository(PROJECT), ProjectInput),
    "services": (ContentRepository(SERVICE), ServiceInput),
    "faqs": (ContentRepository(FAQ_TYPE), FAQInput),
    "testimonials": (ContentRepository(TESTIMONIAL), TestimonialInput),
    "trusted-by": (ContentRepository(TRUSTED_BY), TrustedByInput),
}
