from sitecms.extensions import db
from .base import BaseModel
from .mixins import ActiveMixin, OrderedMixin


class TrustedBy(BaseModel, ActiveMixin, OrderedMixin):
    __tablename__ = "trusted_by"

    name = db.Column(db.String(200), nullable=False)
    logo = db.Column(db.String(1024), nullable=False)  # plain URL
