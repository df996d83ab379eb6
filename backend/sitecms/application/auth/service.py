import logging

from flask import current_app
from flask_jwt_extended import create_access_token
from werkzeug.security import check_password_hash, generate_password_hash

from sitecms.domain.exceptions import BadRequestError, UnauthorizedError
from sitecms.extensions import db
from sitecms.models.admin import Admin
from sitecms.utils.audit import log_action

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

# Compared against when the account does not exist, so both failure paths
# cost one hash check.
_DUMMY_HASH = generate_password_hash("not-a-real-password")


def find_active_admin(admin_id):
    admin = db.session.get(Admin, admin_id)
    if admin is None or not admin.is_active:
        return None
    return admin


def issue_token(admin: Admin) -> str:
    if not current_app.config.get("JWT_SECRET_KEY"):
        raise RuntimeError("JWT_SECRET is not configured")
    return create_access_token(identity=str(admin.id))


def login(email, password):
    """
    Returns (token, admin). A missing account and a wrong password are
    indistinguishable to the caller.
    """
    if not email or not password:
        raise BadRequestError("Please provide email and password")

    admin = Admin.query.filter_by(email=email).first()

    if admin is None or not admin.is_active:
        check_password_hash(_DUMMY_HASH, password)
        logger.info("Login failed for %s: unknown or inactive account", email)
        raise UnauthorizedError("Invalid credentials")

    if not admin.check_password(password):
        logger.info("Login failed for %s: wrong password", email)
        raise UnauthorizedError("Invalid credentials")

    token = issue_token(admin)
    logger.info("Admin logged in: %s", admin.email)
    return token, admin


def change_password(ctx, current_password, new_password):
    if not current_password or not new_password:
        raise BadRequestError("Please provide current and new password")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise BadRequestError(
            f"New password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    admin = ctx.identity
    if not admin.check_password(current_password):
        raise UnauthorizedError("Current password is incorrect")

    admin.set_password(new_password)
    log_action(
        actor=ctx,
        action="admin.password_change",
        entity_type="admin",
        entity_id=admin.id,
    )
    db.session.commit()
    logger.info("Password changed for admin: %s", admin.email)


def seed_admin(email, password, name="Admin User"):
    """
    Create the first admin account. Returns None when one with this email
    already exists.
    """
    if not email or not password:
        raise BadRequestError("ADMIN_EMAIL and ADMIN_INITIAL_PASSWORD must be set")

    if Admin.query.filter_by(email=email).first() is not None:
        return None

    admin = Admin()
    admin.email = email
    admin.name = name or "Admin User"
    admin.role = "admin"
    admin.set_password(password)

    db.session.add(admin)
    db.session.commit()
    logger.info("Seeded admin account %s", email)
    return admin
