from sitecms.extensions import db
from .base import BaseModel

CONTACT_SERVICE_TYPES = ("specialized", "engineering", "consultation", "other")


class Contact(BaseModel):
    __tablename__ = "contacts"

    name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    service_type = db.Column(db.String(50), nullable=False)
    message = db.Column(db.String(2000), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="new")

    __table_args__ = (
        db.Index("idx_contact_status_created", "status", "created_at"),
    )
