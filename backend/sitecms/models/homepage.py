from sitecms.extensions import db
from .base import BaseModel


class Homepage(BaseModel):
    """
    Singleton: at most one row. Each section is a JSON object so a section
    can be patched without touching its siblings.
    """

    __tablename__ = "homepage"
    __wire_aliases__ = {"contact_cta": "contactCTA"}

    hero = db.Column(db.JSON, nullable=False, default=dict)
    about = db.Column(db.JSON, nullable=False, default=dict)
    services = db.Column(db.JSON, nullable=False, default=list)
    contact_cta = db.Column(db.JSON, nullable=False, default=dict)
