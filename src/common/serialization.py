"""Serialization utilities."""

from collections.abc import Iterable
from dataclasses import asdict
from datetime import datetime


def serialize_dataclass(obj, exclude: Iterable[str] = ()) -> dict:
    """Serialize a dataclass to dict, converting datetimes to ISO strings."""
    data = asdict(obj)
    for key in exclude:
        data.pop(key, None)
    for key, value in data.items():
        if isinstance(value, datetime):
            data[key] = value.isoformat()
        elif isinstance(value, dict):
            for k, v in value.items():
                if isinstance(v, datetime):
                    value[k] = v.isoformat()
    return data
