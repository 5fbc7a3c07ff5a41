"""
SimpleDB Field Types — primitive ⇄ refined coercion.

Every declared model field has a kind. Values are stored on the model in
"primitive" form (a ``str`` or ``None``, ready to bind into a statement) and
handed to application code in "refined" form (``int``, ``str``,
``datetime`` or decoded JSON).

Usage:
    from simpledb.models.fields import Field, to_primitive, to_refined

    to_primitive(123, Field.INT)        # "123"
    to_refined("0832", Field.INT)       # 832
    to_primitive([], Field.JSON)        # "[]"
"""

from __future__ import annotations

import datetime
import json
from enum import Enum
from typing import Any, Optional

__all__ = [
    "Field",
    "DATETIME_FORMAT",
    "is_empty",
    "to_primitive",
    "to_refined",
]

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_COLLECTIONS = (list, tuple, dict, set, frozenset)
_STRUCTURED = (list, tuple, dict)


class Field(str, Enum):
    """Supported field kinds."""

    INT = "int"
    STRING = "string"
    DATETIME = "datetime"
    JSON = "json"


# ── Emptiness ────────────────────────────────────────────────────────────────


def _is_empty_collection(value: Any) -> bool:
    return isinstance(value, _COLLECTIONS) and len(value) == 0


def _is_falsy(value: Any) -> bool:
    """General falsiness: None, False, 0, "", "0" and empty collections."""
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, str):
        return value in ("", "0")
    return _is_empty_collection(value)


def is_empty(value: Any, kind: Field) -> bool:
    """
    Determine whether ``value`` collapses to ``None`` for a field of ``kind``.

    - INT: ``False``, ``None``, ``""`` and empty collections are empty.
      Zero (``0`` or ``"0"``) is a valid number.
    - STRING: ``False``, ``None`` and empty collections are empty. ``""`` and
      zero are valid strings.
    - DATETIME: date/time objects are never empty; anything else is empty
      when falsy (including ``"0"``).
    - JSON: lists, tuples and dicts are never empty, even with no items;
      anything else is empty when falsy.
    """
    kind = Field(kind)

    if kind is Field.INT:
        return (
            value is None
            or value is False
            or (isinstance(value, str) and value == "")
            or _is_empty_collection(value)
        )

    if kind is Field.STRING:
        return value is None or value is False or _is_empty_collection(value)

    if kind is Field.DATETIME:
        if isinstance(value, (datetime.datetime, datetime.date)):
            return False
        return _is_falsy(value)

    # JSON
    if isinstance(value, _STRUCTURED):
        return False
    return _is_falsy(value)


# ── Date/time helpers ────────────────────────────────────────────────────────


def _as_datetime(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())
    # ValueError from a malformed string propagates to the caller
    return datetime.datetime.fromisoformat(str(value).strip())


def _storage_datetime(value: Any) -> datetime.datetime:
    """Timezone-aware values are stored as naive UTC; the column has no offset."""
    value = _as_datetime(value)
    if value.tzinfo is not None:
        value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return value


# ── Coercion ─────────────────────────────────────────────────────────────────


def to_primitive(value: Any, kind: Field) -> Optional[str]:
    """
    Convert a value into its storage-ready form for ``kind``.

    Empty values become ``None``; everything else becomes a string.
    Aware date/times are converted to UTC before formatting, so they refine
    back as naive UTC values.
    """
    kind = Field(kind)
    if is_empty(value, kind):
        return None

    if kind is Field.INT:
        return str(int(value))
    if kind is Field.STRING:
        return str(value)
    if kind is Field.DATETIME:
        return _storage_datetime(value).strftime(DATETIME_FORMAT)
    return json.dumps(value, separators=(",", ":"))


def to_refined(value: Any, kind: Field) -> Any:
    """Convert a stored primitive into the application-facing form for ``kind``."""
    kind = Field(kind)
    if is_empty(value, kind):
        return None

    if kind is Field.INT:
        return int(value)
    if kind is Field.STRING:
        return str(value)
    if kind is Field.DATETIME:
        return _as_datetime(value)
    if isinstance(value, (str, bytes, bytearray)):
        return json.loads(value)
    return value
