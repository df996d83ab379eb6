from sitecms.extensions import db
from .base import BaseModel
from .mixins import ActiveMixin, OrderedMixin


class Testimonial(BaseModel, ActiveMixin, OrderedMixin):
    __tablename__ = "testimonials"

    name = db.Column(db.String(100), nullable=False)
    position = db.Column(db.String(100), nullable=False)
    company = db.Column(db.String(100), nullable=False)
    testimonial = db.Column(db.String(1000), nullable=False)
    image = db.Column(db.String(1024), nullable=False, default="")  # plain URL
    rating = db.Column(db.Integer, nullable=False, default=5)
