from typing import Any, Iterable, Mapping

from sitecms.domain.exceptions import ConflictError
from .exceptions import InvariantViolation


def is_blank(value: Any) -> bool:
    """
    A value counts as missing when it is None or an empty/whitespace string.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def assert_required(
    data: Mapping[str, Any],
    required: Iterable[str],
    message: str = "Please provide all required fields",
) -> None:
    missing = [field for field in required if is_blank(data.get(field))]
    if missing:
        raise InvariantViolation(f"{message}: {', '.join(missing)}")


def assert_single_document(existing_count: int, type_name: str) -> None:
    """
    Singleton content types may hold at most one document.
    """
    if existing_count > 0:
        raise ConflictError(f"Only one {type_name} document is allowed")
