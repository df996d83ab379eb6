import logging

from sitecms.application.auth import service as auth_service
from sitecms.schemas.auth import ChangePasswordInput, LoginInput
from sitecms.utils.decorators import admin_required
from sitecms.utils.responses import success
from .helpers import parse_body
from . import api_bp

logger = logging.getLogger(__name__)


@api_bp.route("/auth/login", methods=["POST"])
def login():
    body = parse_body(LoginInput)
    token, admin = auth_service.login(body.email, body.password)

    return success({
        "token": token,
        "user": admin.to_public(),
    })


@api_bp.route("/auth/me", methods=["GET"])
@admin_required
def me(ctx):
    return success(ctx.identity.to_public())


@api_bp.route("/auth/logout", methods=["POST"])
@admin_required
def logout(ctx):
    # Tokens are stateless; the client drops its copy.
    logger.info("Admin logged out: %s", ctx.email)
    return success(message="Logged out successfully")


@api_bp.route("/auth/change-password", methods=["PUT"])
@admin_required
def change_password(ctx):
    body = parse_body(ChangePasswordInput)
    auth_service.change_password(ctx, body.current_password, body.new_password)
    return success(message="Password changed successfully")
