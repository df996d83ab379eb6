from sitecms.extensions import db
from .base import BaseModel
from .mixins import ActiveMixin, OrderedMixin

FAQ_CATEGORIES = ("general", "services", "pricing", "technical", "projects")


class FAQ(BaseModel, ActiveMixin, OrderedMixin):
    __tablename__ = "faqs"

    question = db.Column(db.String(500), nullable=False)
    answer = db.Column(db.String(3000), nullable=False)
    category = db.Column(db.String(50), nullable=False, default="general", index=True)
