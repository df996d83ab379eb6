from sitecms.extensions import db
from .base import BaseModel
from .mixins import ImageMixin, IsActiveMixin, OrderedMixin

DEFAULT_GRADIENT = "from-blue-500 to-blue-700"


class Service(BaseModel, IsActiveMixin, OrderedMixin, ImageMixin):
    __tablename__ = "services"

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.String(1000), nullable=False)

    # Ordered [{"title": ..., "blogId": ...}]; blogId is a soft link to blogs.id
    sub_services = db.Column(db.JSON, nullable=False, default=list)
    applications = db.Column(db.JSON, nullable=False, default=list)
    gradient = db.Column(db.String(100), nullable=False, default=DEFAULT_GRADIENT)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
