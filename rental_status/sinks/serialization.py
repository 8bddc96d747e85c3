"""JSON-ready conversion of records and event envelopes."""

import json
from dataclasses import fields, is_dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any


def to_dict(obj: Any) -> dict:
    """Convert a record, event or plain mapping to a JSON-ready dict.

    Fields whose names start with an underscore are internal state and are
    left out.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: serialize_value(getattr(obj, f.name))
            for f in fields(obj)
            if not f.name.startswith("_")
        }
    if isinstance(obj, dict):
        return {str(k): serialize_value(v) for k, v in obj.items()}
    return {"value": str(obj)}


def serialize_value(value: Any) -> Any:
    """Money stays exact as a string; statuses use their wire values."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    # datetime is a date subclass
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_value(v) for v in value]
    return value


def to_json(obj: Any) -> bytes:
    """UTF-8 JSON for a message payload."""
    return json.dumps(to_dict(obj), ensure_ascii=False, default=str).encode("utf-8")
