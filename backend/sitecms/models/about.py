from sitecms.extensions import db
from .base import BaseModel


class About(BaseModel):
    """Singleton: at most one row."""

    __tablename__ = "about"

    # main
    hero_title = db.Column(db.String(255), nullable=False, default="")
    hero_subtitle = db.Column(db.String(500), nullable=False, default="")
    mission = db.Column(db.Text, nullable=False, default="")
    vision = db.Column(db.Text, nullable=False, default="")

    # story
    history = db.Column(db.Text, nullable=False, default="")
    story_title = db.Column(db.String(255), nullable=False, default="Our Story")
    story_image = db.Column(db.String(1024), nullable=False, default="")

    founded_year = db.Column(db.String(50), nullable=False, default="")
    experience = db.Column(db.String(50), nullable=False, default="")
    completed_projects = db.Column(db.String(50), nullable=False, default="")

    # leadership
    director_name = db.Column(db.String(255), nullable=False, default="")
    director_position = db.Column(db.String(255), nullable=False, default="Managing Director")
    director_experience = db.Column(db.String(255), nullable=False, default="")
    director_bio = db.Column(db.Text, nullable=False, default="")

    values = db.Column(db.JSON, nullable=False, default=list)
    team = db.Column(db.JSON, nullable=False, default=list)
    stats = db.Column(db.JSON, nullable=False, default=list)
