# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Conversion of Python values into MySQL literal text.

Every literal that ends up in a statement built by QueryBuilder goes through
sanitize(). The dispatch is on a closed set of value kinds, so adding a new
supported type means adding a ValueKind member and a branch in sanitize().

Rendering rules:
    None                  -> NULL
    bool                  -> true / false
    int, float, Decimal   -> decimal text, unquoted
    datetime, date        -> 'YYYY-MM-DD HH:MM:SS' (aware values in UTC)
    str, UUID             -> single-quoted, MySQL escaped
    bytes, bytearray      -> X'<hex>'
    Mapping, list, tuple  -> compact JSON, then quoted as a string

Example:
    Rendering a few values::

        sanitize(4.3)                 # 4.3
        sanitize(None)                # NULL
        sanitize(";DELETE FROM t;")   # ';DELETE FROM t;'
        sanitize({"test": "demo"})    # '{\\"test\\":\\"demo\\"}'
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

CIRCULAR = "[Circular ~]"

_ESCAPES = {
    "\0": "\\0",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\x1a": "\\Z",
    '"': '\\"',
    "'": "\\'",
    "\\": "\\\\",
}
_ESCAPE_RE = re.compile("[\0\b\t\n\r\x1a\"'\\\\]")


class ValueKind(Enum):
    """Kinds of values the sanitizer knows how to render."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    DATETIME = "datetime"
    STRING = "string"
    BYTES = "bytes"
    STRUCTURED = "structured"


def value_kind(value: Any) -> ValueKind:
    """Classify a value.

    Raises:
        TypeError: If the value has no SQL literal representation.
    """
    if isinstance(value, Enum):
        return value_kind(value.value)
    if value is None:
        return ValueKind.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return ValueKind.NUMBER
    if isinstance(value, (datetime, date)):
        return ValueKind.DATETIME
    if isinstance(value, (str, UUID)):
        return ValueKind.STRING
    if isinstance(value, (bytes, bytearray)):
        return ValueKind.BYTES
    if isinstance(value, (Mapping, list, tuple)):
        return ValueKind.STRUCTURED
    raise TypeError(f"Unsupported value type for SQL literal: {type(value).__name__}")


def sanitize(value: Any) -> str:
    """Render a value as a SQL literal fragment; enum members render their value."""
    if isinstance(value, Enum):
        value = value.value
    match value_kind(value):
        case ValueKind.NULL:
            return "NULL"
        case ValueKind.BOOLEAN:
            return "true" if value else "false"
        case ValueKind.NUMBER:
            return format_number(value)
        case ValueKind.DATETIME:
            return f"'{format_datetime(value)}'"
        case ValueKind.STRING:
            return escape_string(str.__str__(value) if isinstance(value, str) else str(value))
        case ValueKind.BYTES:
            return f"X'{bytes(value).hex()}'"
        case ValueKind.STRUCTURED:
            return escape_string(safe_dumps(value))


def escape_string(text: str) -> str:
    """Quote text as a MySQL string literal."""
    return "'" + _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], text) + "'"


def format_number(value: int | float | Decimal) -> str:
    """Return canonical decimal text for a number.

    Raises:
        ValueError: For NaN and infinities, which MySQL cannot store.
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Cannot render non-finite number {value!r} as SQL")
    if isinstance(value, Decimal) and not value.is_finite():
        raise ValueError(f"Cannot render non-finite number {value!r} as SQL")
    # base type conversions: subclasses may override __str__
    if isinstance(value, int):
        return int.__repr__(value)
    if isinstance(value, float):
        return float.__repr__(value)
    return str(value)


def format_datetime(value: date) -> str:
    """Format a date or datetime as 'YYYY-MM-DD HH:MM:SS'.

    Aware datetimes are converted to UTC, matching the session time zone
    set on every connection. Plain dates render at midnight.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        hour, minute, second = value.hour, value.minute, value.second
    else:
        hour = minute = second = 0
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{hour:02d}:{minute:02d}:{second:02d}"
    )


def safe_dumps(value: Any) -> str:
    """Serialize to compact JSON, replacing self-containing values.

    A mapping or sequence that is reached again while it is still being
    serialized is written as "[Circular ~]". Values shared between
    siblings are not cycles and are written in full.
    """
    return json.dumps(
        _to_plain(value, set()),
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def _to_plain(value: Any, ancestors: set[int]) -> Any:
    """Convert value to JSON-ready data; ancestors holds ids being visited."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (Mapping, list, tuple)):
        marker = id(value)
        if marker in ancestors:
            return CIRCULAR
        ancestors.add(marker)
        try:
            if isinstance(value, Mapping):
                return {str(k): _to_plain(v, ancestors) for k, v in value.items()}
            return [_to_plain(item, ancestors) for item in value]
        finally:
            ancestors.discard(marker)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return value


__all__ = [
    "CIRCULAR",
    "ValueKind",
    "value_kind",
    "sanitize",
    "escape_string",
    "format_number",
    "format_datetime",
    "safe_dumps",
]
