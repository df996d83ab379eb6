from sitecms.extensions import db


class ActiveMixin:
    """Visibility toggle stored as `active`."""

    active = db.Column(db.Boolean, nullable=False, default=True, index=True)


class IsActiveMixin:
    """Visibility toggle stored as `is_active`."""

    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)


class OrderedMixin:
    order = db.Column(db.Integer, nullable=False, default=0, index=True)


class ImageMixin:
    """
    Delivered URL plus the media gateway handle needed to delete it.
    """

    image = db.Column(db.String(1024), nullable=False)
    image_public_id = db.Column(db.String(512), nullable=False)
