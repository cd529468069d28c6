"""Canonical text of leaf values.

The canonicalizer writes every leaf with leaf_literal(), and primitive
equality compares leaves by the same text, so two leaves are equal
exactly when they render identically.

Leaf Rendering Rules:
- None and UNDEFINED render as null
- Numbers follow the ECMAScript number-to-string rules (1.0 -> 1,
  1e21 -> 1e+21, 1e-7 -> 1e-7)
- Strings are JSON strings with non-ASCII characters left unescaped
- Decimal and UUID render as JSON strings of str(); dates and times as
  JSON strings of isoformat()
- Enum members render as their (unwrapped) value
"""

from __future__ import annotations

import datetime
import json
import math
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from valuekit.domain.errors.value_graph import NonFiniteNumberError, UnsupportedValueError
from valuekit.domain.primitives.undefined import UNDEFINED

JSON_NULL: str = "null"

# ECMAScript uses exponent notation outside 1e-6 <= |x| < 1e21
_EXPONENT_UPPER: int = 21
_EXPONENT_LOWER: int = -6


def unwrap_enum(value: Any) -> Any:
    """Return the value behind (possibly nested) Enum members."""
    while isinstance(value, Enum):
        value = value.value
    return value


def format_number(value: int | float) -> str:
    """Render a number the way ECMAScript Number.prototype.toString does.

    Raises:
        NonFiniteNumberError: For NaN and infinities.
    """
    if isinstance(value, int):
        return str(int(value))
    if not math.isfinite(value):
        raise NonFiniteNumberError(value)
    if value == 0:
        return "0"

    sign, digit_tuple, raw_exponent = Decimal(repr(float(value))).as_tuple()
    exponent = int(raw_exponent)
    digits = "".join(str(d) for d in digit_tuple)
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped

    k = len(digits)
    n = exponent + k
    if k <= n <= _EXPONENT_UPPER:
        text = digits + "0" * (n - k)
    elif 0 < n <= _EXPONENT_UPPER:
        text = f"{digits[:n]}.{digits[n:]}"
    elif _EXPONENT_LOWER < n <= 0:
        text = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        mantissa = digits[0] + (f".{digits[1:]}" if k > 1 else "")
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return f"-{text}" if sign else text


def scalar_text(value: Any) -> str:
    """Return the string an atomic scalar renders as."""
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    raise UnsupportedValueError(type(value).__name__)


def leaf_literal(value: Any) -> str:
    """Render a leaf as its canonical JSON literal.

    Raises:
        NonFiniteNumberError: For NaN and infinities.
        UnsupportedValueError: If value is not a leaf.
    """
    value = unwrap_enum(value)
    if value is None or value is UNDEFINED:
        return JSON_NULL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return json.dumps(scalar_text(value), ensure_ascii=False)


def utf16_sort_key(text: str) -> bytes:
    """Sort key ordering strings by UTF-16 code units.

    Matches JavaScript string comparison, including for characters
    outside the Basic Multilingual Plane.
    """
    return text.encode("utf-16-be", "surrogatepass")
