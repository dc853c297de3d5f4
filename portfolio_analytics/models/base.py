"""Serialization helpers shared by all result dataclasses."""

import dataclasses
import math
from datetime import date, datetime
from enum import Enum
from typing import Any, cast


def to_serializable(value: Any) -> Any:
    """Convert dataclasses, enums, dates and containers into plain JSON data."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: to_serializable(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(to_serializable(k)): to_serializable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_serializable(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return 0.0
    if hasattr(value, 'item') and callable(value.item):
        # numpy scalars
        return value.item()
    return value


class SerializableMixin:
    """Adds ``to_dict`` to dataclasses."""

    def to_dict(self) -> dict[str, Any]:
        """Return this object as JSON-serializable plain data."""
        return cast(dict[str, Any], to_serializable(self))
