import logging
import traceback

from flask import current_app, request
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException, NotFound

from sitecms.domain.exceptions import ApiError
from sitecms.extensions import db
from sitecms.utils.responses import failure

logger = logging.getLogger(__name__)

_HTTP_MESSAGES = {
    413: "Payload too large",
    429: "Too many requests from this IP, please try again later.",
}


def _with_stack(extra, error):
    if current_app.debug:
        extra["stack"] = "".join(traceback.format_exception(error))
    return extra


def _validation_message(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "Invalid value").removeprefix("Value error, ")
        messages.append(f"{field}: {message}" if field else message)
    return ", ".join(messages)


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            logger.error("%s: %s", type(error).__name__, error.message)
        return failure(error.message, error.status_code, **_with_stack({}, error))

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return failure(_validation_message(error), 400)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        logger.warning("Integrity error: %s", error.orig)
        return failure("Duplicate field value entered", 400)

    @app.errorhandler(NotFound)
    def handle_not_found(error):
        return failure(f"Route {request.path} not found", 404)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        message = _HTTP_MESSAGES.get(error.code) or error.description or error.name
        return failure(message, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        db.session.rollback()
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return failure("Internal Server Error", 500, **_with_stack({}, error))
