import logging
from dataclasses import dataclass
from functools import wraps

from flask_jwt_extended import get_current_user, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from sitecms.domain.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedContext:
    """The resolved admin, handed to gated views as their first argument."""

    identity: object

    @property
    def actor_id(self):
        return self.identity.id

    @property
    def email(self):
        return self.identity.email


def admin_required(fn):
    """
    Access gate: verifies the bearer token, re-loads the admin it names and
    calls the view with an AuthenticatedContext. Every failure surfaces as
    the same 401.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            verify_jwt_in_request()
            admin = get_current_user()
        except (JWTExtendedException, PyJWTError) as exc:
            logger.info("Rejected bearer token: %s: %s", type(exc).__name__, exc)
            raise UnauthorizedError("Not authorized to access this route") from exc

        if admin is None:
            raise UnauthorizedError("Not authorized to access this route")

        return fn(AuthenticatedContext(admin), *args, **kwargs)
    return wrapper


def roles_required(*allowed_roles):
    """Must sit below @admin_required."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(ctx, *args, **kwargs):
            if ctx.identity.role not in allowed_roles:
                raise ForbiddenError(
                    f"User role {ctx.identity.role} is not authorized to access this route"
                )
            return fn(ctx, *args, **kwargs)
        return wrapper
    return decorator
