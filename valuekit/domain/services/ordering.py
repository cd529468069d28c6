"""Multi-key ordering of records and mappings.

compare_by_keys() walks the key list and returns the result of the first
key on which the two values differ:

- equal primitives (or the very same object) move on to the next key,
- None, UNDEFINED and missing keys sort before any concrete value, and
  two absent values tie,
- values of the same orderable kind compare with < and >; strings compare
  by UTF-16 code units, the same order canonical_key_order() uses,
- values of incomparable kinds tie on that key.

Exhausting all keys yields 0: the values rank equal, though they need not
be deep-equal.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Sequence
from typing import Any, Literal, TypeVar

from valuekit.domain.primitives.literals import utf16_sort_key
from valuekit.domain.primitives.undefined import UNDEFINED
from valuekit.domain.primitives.value_kinds import (
    is_absent,
    is_mapping,
    is_primitive,
    primitive_equal,
    primitive_kind,
)

T = TypeVar("T")

Ordering = Literal[-1, 0, 1]


def compare_by_keys(
    a: Any,
    b: Any,
    order_by: Sequence[str] | None = None,
) -> Ordering:
    """Compare two records key by key.

    Args:
        a: First record or mapping.
        b: Second record or mapping.
        order_by: Keys to compare, most significant first. When empty or
                  None, the keys of a in their enumeration order are used.

    Returns:
        -1 if a sorts first, 1 if b sorts first, 0 if no key differs.
    """
    keys = list(order_by) if order_by else list(_field_names(a))
    for key in keys:
        a_value = _field(a, key)
        b_value = _field(b, key)
        if a_value is b_value or primitive_equal(a_value, b_value):
            continue
        if is_absent(a_value):
            return -1
        if is_absent(b_value):
            return 1
        if not _orderable(a_value, b_value):
            continue
        if isinstance(a_value, str) and isinstance(b_value, str):
            a_value = utf16_sort_key(a_value)
            b_value = utf16_sort_key(b_value)
        try:
            if a_value < b_value:
                return -1
            if a_value > b_value:
                return 1
        except TypeError:
            # e.g. naive vs aware datetimes: no order, tie on this key
            continue
    return 0


def sort_by_keys(
    values: Iterable[T],
    order_by: Sequence[str] | None = None,
    *,
    reverse: bool = False,
) -> list[T]:
    """Return values sorted with compare_by_keys().

    The sort is stable, so values that rank equal keep their input order.
    """
    return sorted(
        values,
        key=functools.cmp_to_key(lambda x, y: compare_by_keys(x, y, order_by)),
        reverse=reverse,
    )


def _field_names(value: Any) -> Iterable[str]:
    if is_mapping(value):
        return value.keys()
    return ()


def _field(value: Any, key: str) -> Any:
    if is_mapping(value):
        return value.get(key, UNDEFINED)
    return getattr(value, key, UNDEFINED)


def _orderable(a: Any, b: Any) -> bool:
    if not (is_primitive(a) and is_primitive(b)):
        return False
    return primitive_kind(a) == primitive_kind(b)
