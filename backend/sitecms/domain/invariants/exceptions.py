from sitecms.domain.exceptions import BadRequestError


class InvariantViolation(BadRequestError):
    """A document would break one of its type's rules if written."""
