import re
from typing import Any, Dict

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from sitecms.domain.invariants.content import is_blank

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


class RequestModel(BaseModel):
    """
    Base for request bodies: camelCase on the wire, snake_case in Python.
    Unknown keys are dropped rather than rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    def changes(self, by_alias: bool = False) -> Dict[str, Any]:
        """
        Top-level fields the caller actually sent, keyed by attribute name
        (or by wire name with ``by_alias``).
        None and "" count as omitted; nested values keep their wire keys.
        """
        dumped = self.model_dump(by_alias=True, exclude_none=True)
        result = {}
        for name in self.model_fields_set:
            field = type(self).model_fields[name]
            value = dumped.get(field.alias or name)
            if not is_blank(value):
                result[(field.alias or name) if by_alias else name] = value
        return result


def one_of(value, allowed, label):
    if value is None or value == "":
        return value
    if value not in allowed:
        raise ValueError(f"{value} is not a valid {label}")
    return value


def parse_date(value):
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as exc:
            raise ValueError("Invalid date") from exc
    return value


def normalize_email(value):
    if value is None or value == "":
        return value
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please provide a valid email")
    return value


def lowered(value):
    return value.lower() if isinstance(value, str) else value
