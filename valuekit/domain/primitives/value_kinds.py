"""Classification of value graph nodes.

Every node of a value graph is exactly one of:

- a primitive (None, UNDEFINED, bool, int, float, str, or an atomic
  scalar such as Decimal, UUID, a date/time or an Enum member),
- an ordered sequence (list or tuple; str and bytes are not sequences),
- a keyed mapping (any collections.abc.Mapping, records included),
- an opaque object the kernel does not know how to traverse.
"""

from __future__ import annotations

import datetime
import math
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from valuekit.domain.primitives.literals import leaf_literal, unwrap_enum
from valuekit.domain.primitives.undefined import UNDEFINED

ATOMIC_SCALAR_TYPES: tuple[type, ...] = (
    Decimal,
    UUID,
    datetime.date,
    datetime.time,
    Enum,
)

_JSON_SCALAR_TYPES: tuple[type, ...] = (bool, int, float, str)

# Exact types whose == agrees with their literal
_SELF_LITERAL_TYPES: frozenset[type] = frozenset({bool, int, float, str})


def is_absent(value: Any) -> bool:
    """Return True for None and UNDEFINED (the two "no value" markers)."""
    return value is None or value is UNDEFINED


def is_primitive(value: Any) -> bool:
    """Return True if value is a leaf the kernel compares by value.

    An Enum member is a leaf when its value is.
    """
    value = unwrap_enum(value)
    return (
        is_absent(value)
        or isinstance(value, _JSON_SCALAR_TYPES)
        or isinstance(value, ATOMIC_SCALAR_TYPES)
    )


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def primitive_kind(value: Any) -> object:
    """Return the ordering kind of a primitive.

    Only values of the same kind are ordered against each other. bool is
    its own kind; int and float share the number kind. None and UNDEFINED
    share the null kind.
    """
    if is_absent(value):
        return "null"
    if isinstance(value, Enum):
        return type(value)
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, datetime.datetime):
        return datetime.datetime
    if isinstance(value, datetime.date):
        return datetime.date
    return type(value)


def primitive_equal(a: Any, b: Any) -> bool:
    """Compare two values as primitives.

    Leaves are equal exactly when their canonical literals are equal, so
    Decimal("1.5") and "1.5" are equal while Decimal("1.5") and
    Decimal("1.50") are not. Returns False when either side is not a
    primitive.
    """
    if a is b:
        return True
    if not (is_primitive(a) and is_primitive(b)):
        return False
    a = unwrap_enum(a)
    b = unwrap_enum(b)
    if type(a) is type(b) and type(a) in _SELF_LITERAL_TYPES:
        return bool(a == b)
    if _non_finite(a) or _non_finite(b):
        # no literal exists; fall back to float comparison
        return bool(a == b)
    return leaf_literal(a) == leaf_literal(b)


def _non_finite(value: Any) -> bool:
    return isinstance(value, float) and not math.isfinite(value)
