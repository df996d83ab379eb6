class ApiError(Exception):
    """
    Base class for errors that map onto an HTTP response.

    The central error handler turns these into the standard envelope:
    {"success": false, "error": <message>}
    """

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(ApiError):
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(ApiError):
    status_code = 401
    default_message = "Not authorized to access this route"


class ForbiddenError(ApiError):
    status_code = 403
    default_message = "Insufficient permissions"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Resource already exists"


class ExternalServiceError(ApiError):
    status_code = 500
    default_message = "External service failure"


class InternalError(ApiError):
    status_code = 500
