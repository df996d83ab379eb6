from sitecms.extensions import db
from .base import BaseModel, utc_now
from .mixins import ImageMixin, IsActiveMixin

BLOG_CATEGORIES = (
    "Waterproofing",
    "Structural Engineering",
    "Flooring Solutions",
    "Construction Tips",
    "Technology",
    "Safety",
    "Case Studies",
    "Industry News",
)

DEFAULT_AUTHOR = "Editorial Team"


class Blog(BaseModel, IsActiveMixin, ImageMixin):
    __tablename__ = "blogs"

    title = db.Column(db.String(200), nullable=False)
    excerpt = db.Column(db.String(500), nullable=False)
    content = db.Column(db.Text, nullable=False)
    author = db.Column(db.String(200), nullable=False, default=DEFAULT_AUTHOR)
    date = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    category = db.Column(db.String(100), nullable=False, index=True)
    read_time = db.Column(db.String(50), nullable=False, default="5 min")
    published = db.Column(db.Boolean, nullable=False, default=False, index=True)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    views = db.Column(db.Integer, nullable=False, default=0)
    tags = db.Column(db.JSON, nullable=False, default=list)

    __table_args__ = (
        db.Index("idx_blog_category_visibility", "category", "published", "is_active"),
    )
