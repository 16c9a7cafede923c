"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def to_dict(obj: Any, decimal_as: type = str) -> dict:
    """Convert object to dictionary.

    Parameters
    ----------
    obj : Any
        Dataclass instance, dict, or any other value.
    decimal_as : type
        ``str`` keeps Decimal precision, ``float`` gives plain JSON numbers.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return dataclass_to_dict(obj, decimal_as)
    elif isinstance(obj, dict):
        return {k: serialize_value(v, decimal_as) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any, decimal_as: type = str) -> dict:
    """Convert dataclass to dict with proper serialization.

    Reads fields directly instead of ``dataclasses.asdict`` so that
    IntEnum values (progress stages) keep their enum type until
    ``serialize_value`` sees them.
    """
    return {f.name: serialize_value(getattr(obj, f.name), decimal_as) for f in fields(obj)}


def serialize_value(value: Any, decimal_as: type = str) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return decimal_as(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value, decimal_as)
    elif isinstance(value, dict):
        return {k: serialize_value(v, decimal_as) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v, decimal_as) for v in value]
    return value
