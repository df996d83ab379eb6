from typing import Dict, Tuple

from sitecms.domain.exceptions import BadRequestError

CONTACT_STATUSES: Tuple[str, ...] = ("new", "read", "replied")
QUOTE_STATUSES: Tuple[str, ...] = ("new", "contacted", "quoted", "closed")

# Lead records start as "new"; any status of the enum may follow any other.
LEAD_STATUSES: Dict[str, Tuple[str, ...]] = {
    "contact": CONTACT_STATUSES,
    "quote": QUOTE_STATUSES,
}


def assert_lead_status(*, kind: str, status: str | None) -> str:
    """
    Guards lead status changes. Returns the normalized status.
    """
    allowed = LEAD_STATUSES[kind]
    if not isinstance(status, str) or status.lower() not in allowed:
        raise BadRequestError("Invalid status value")
    return status.lower()
