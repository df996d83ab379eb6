from sitecms.extensions import db
from .base import BaseModel
from .mixins import ImageMixin, IsActiveMixin

PROJECT_CATEGORIES = (
    "Waterproofing",
    "Structural Retrofitting",
    "Epoxy Flooring",
    "ACP Cladding",
    "Metal Fabrication",
    "Expansion Joint",
)


class Project(BaseModel, IsActiveMixin, ImageMixin):
    __tablename__ = "projects"

    title = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(100), nullable=False, index=True)
    location = db.Column(db.String(255), nullable=False)
    year = db.Column(db.String(20), nullable=False)
    client = db.Column(db.String(255), nullable=False)
    description = db.Column(db.String(2000), nullable=False)
    scope = db.Column(db.JSON, nullable=False, default=list)
    challenges = db.Column(db.String(1000), nullable=False, default="")
    solution = db.Column(db.String(1000), nullable=False, default="")
    results = db.Column(db.JSON, nullable=False, default=list)

    # Ordered [{"url": ..., "publicId": ...}]
    gallery = db.Column(db.JSON, nullable=False, default=list)
