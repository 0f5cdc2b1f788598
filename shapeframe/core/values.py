"""
Value coercion for schema-less result rows.

Row values arrive as JSON-decoded Python objects: None, numbers, booleans,
strings, lists and dicts. Every helper here is total: a value that cannot be
interpreted as the requested type yields None instead of raising.

Examples:
    >>> as_number("1.5e3")
    1500.0
    >>> as_number(True) is None
    True
    >>> as_display_text(["web", 3.0])
    '["web",3.0]'
"""

from __future__ import annotations

import json
import math
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import numpy as np

from shapeframe.core.fields import BEGIN_TIME_FIELD, END_TIME_FIELD

# Locale-independent decimal or scientific notation, no surrounding whitespace
_NUMERIC_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class ValueKind(Enum):
    """Tag over the dynamic value types a row may hold."""

    NULL = "null"
    NUMBER = "number"
    BOOL = "bool"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class TimeUnit(Enum):
    """Epoch unit a timestamp-bearing field is expressed in."""

    MILLISECONDS = "ms"
    SECONDS = "s"


def kind_of(value: Any) -> ValueKind:
    """
    Tag a raw value

    bool is checked before numbers since it subclasses int. Objects outside
    the JSON vocabulary are treated as strings.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, (bool, np.bool_)):
        return ValueKind.BOOL
    if isinstance(value, (int, float, np.number)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    return ValueKind.STRING


def is_blank(value: Any) -> bool:
    """None or empty string: carries no information for type inference."""
    return value is None or (isinstance(value, str) and value == "")


def parse_numeric_string(text: str) -> float | None:
    """Parse decimal or scientific notation, None if the text is not numeric."""
    if not _NUMERIC_PATTERN.fullmatch(text):
        return None
    try:
        return float(text)
    except (ValueError, OverflowError):
        return None


def as_number(value: Any) -> float | None:
    """Interpret a value as a float (numbers and numeric strings only)."""
    kind = kind_of(value)
    if kind is ValueKind.NUMBER:
        try:
            return float(value)
        except (OverflowError, TypeError):
            return None
    if kind is ValueKind.STRING and isinstance(value, str):
        return parse_numeric_string(value)
    return None


def as_bool(value: Any) -> bool | None:
    """Only native booleans are accepted; "true" strings stay text."""
    if kind_of(value) is ValueKind.BOOL:
        return bool(value)
    return None


def unit_for_field(field_name: str) -> TimeUnit:
    """timestamp carries epoch milliseconds, begin/end markers epoch seconds."""
    if field_name in (BEGIN_TIME_FIELD, END_TIME_FIELD):
        return TimeUnit.SECONDS
    return TimeUnit.MILLISECONDS


def as_timestamp(value: Any, unit: TimeUnit = TimeUnit.MILLISECONDS) -> datetime | None:
    """
    Interpret a value as an epoch instant

    Args:
        value: Number or numeric string
        unit: Epoch unit of the value

    Returns:
        Timezone-aware UTC datetime, or None when the value is not numeric,
        not finite, or out of the representable range
    """
    number = as_number(value)
    if number is None or not math.isfinite(number):
        return None
    seconds = number / 1000.0 if unit is TimeUnit.MILLISECONDS else number
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _format_number(number: float) -> str:
    if math.isfinite(number) and number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def _json_default(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    return str(value)


def as_display_text(value: Any) -> str:
    """
    Canonical human-readable rendering

    Null renders as empty text, arrays and objects as compact JSON with
    sorted keys.
    """
    kind = kind_of(value)
    if kind is ValueKind.NULL:
        return ""
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        number = as_number(value)
        return _format_number(number) if number is not None else str(value)
    if kind in (ValueKind.ARRAY, ValueKind.OBJECT):
        return json.dumps(
            value, separators=(",", ":"), sort_keys=True, default=_json_default
        )
    return value if isinstance(value, str) else str(value)
