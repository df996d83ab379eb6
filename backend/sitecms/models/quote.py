from sitecms.extensions import db
from .base import BaseModel

QUOTE_SERVICE_TYPES = ("construction", "engineering", "consultation", "multiple")
QUOTE_PROJECT_TYPES = ("residential", "commercial", "industrial", "institutional", "infrastructure", "")
QUOTE_TIMELINES = ("immediate", "1-month", "2-3-months", "3-6-months", "6-months-plus", "")
QUOTE_BUDGETS = ("under-500k", "500k-1m", "1m-2m", "2m-5m", "5m-plus", "")


class Quote(BaseModel):
    __tablename__ = "quotes"

    name = db.Column(db.String(100), nullable=False)
    company = db.Column(db.String(150), nullable=False, default="")
    phone = db.Column(db.String(20), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    service_type = db.Column(db.String(50), nullable=False, index=True)
    project_type = db.Column(db.String(50), nullable=False, default="")
    project_size = db.Column(db.String(100), nullable=False, default="")
    timeline = db.Column(db.String(50), nullable=False, default="")
    budget = db.Column(db.String(50), nullable=False, default="")
    description = db.Column(db.String(3000), nullable=False)
    address = db.Column(db.String(300), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="new")

    __table_args__ = (
        db.Index("idx_quote_status_created", "status", "created_at"),
    )
