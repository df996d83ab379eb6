from datetime import date, datetime
from typing import Any, Dict, Iterable

from pydantic.alias_generators import to_camel


def wire_name(model_cls, attribute: str) -> str:
    aliases = getattr(model_cls, "__wire_aliases__", {})
    return aliases.get(attribute) or to_camel(attribute)


def _wire_value(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def normalize_document(doc, *, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Serialize any content model to its camelCase JSON shape, with the
    primary key under ``_id``.
    """
    if doc is None:
        raise ValueError("Document cannot be None")

    data: Dict[str, Any] = {"_id": doc.id}
    for column in doc.__table__.columns:
        name = column.key
        if name == "id" or name in exclude:
            continue
        data[wire_name(type(doc), name)] = _wire_value(getattr(doc, name))

    return data


def normalize_lead_receipt(doc) -> Dict[str, Any]:
    """What a public form submission gets back."""
    return {"id": doc.id, "name": doc.name, "email": doc.email}
