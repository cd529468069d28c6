"""Structural equality of value graphs.

Equality never builds a canonical string: it walks both graphs together
and stops at the first mismatch. For acyclic inputs it agrees exactly with
canonical-form equality:

- identity is always equal,
- leaves compare by their canonical literal (True != 1, 1 == 1.0,
  Decimal("1.5") == "1.5", Decimal("1.5") != Decimal("1.50"),
  None == UNDEFINED), and Enum members by their value,
- a primitive never equals a sequence or mapping,
- mapping fields holding UNDEFINED count as absent.

Equality does not track ancestors. Recursion is bounded by max_depth so a
cyclic input fails with MaxDepthExceededError instead of hanging.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from valuekit.domain.errors.value_graph import MaxDepthExceededError
from valuekit.domain.primitives.limits import DEFAULT_MAX_DEPTH
from valuekit.domain.primitives.literals import unwrap_enum
from valuekit.domain.primitives.undefined import UNDEFINED
from valuekit.domain.primitives.value_kinds import (
    is_mapping,
    is_primitive,
    is_sequence,
    primitive_equal,
)

log = structlog.get_logger()


def present_keys(mapping: Mapping[Any, Any]) -> set[Any]:
    """Return the keys of mapping whose value is not UNDEFINED."""
    return {key for key, value in mapping.items() if value is not UNDEFINED}


def shallow_equal(a: Any, b: Any) -> bool:
    """Compare two values one level deep.

    Sequences must have the same length and pairwise identical (or equal
    primitive) elements. Mappings must have the same present keys and
    pairwise identical (or equal primitive) values. Nested structures are
    compared by identity only.
    """
    if a is b:
        return True
    a = unwrap_enum(a)
    b = unwrap_enum(b)
    if is_primitive(a) or is_primitive(b):
        return primitive_equal(a, b)
    if is_sequence(a) and is_sequence(b):
        if len(a) != len(b):
            return False
        return all(_same(x, y) for x, y in zip(a, b))
    if is_mapping(a) and is_mapping(b):
        keys = present_keys(a)
        if keys != present_keys(b):
            return False
        return all(_same(a[key], b[key]) for key in keys)
    return _opaque_equal(a, b)


def deep_equal(a: Any, b: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """Compare two value graphs structurally.

    Args:
        a: First value graph.
        b: Second value graph.
        max_depth: Deepest sequence/mapping nesting to descend into.

    Returns:
        True if both graphs have the same structure and leaf values.

    Raises:
        MaxDepthExceededError: If nesting exceeds max_depth, which is how
            a cyclic input surfaces.
    """
    return _deep_equal(a, b, 0, max_depth)


def _deep_equal(a: Any, b: Any, depth: int, max_depth: int) -> bool:
    if a is b:
        return True
    a = unwrap_enum(a)
    b = unwrap_enum(b)
    if is_primitive(a) or is_primitive(b):
        return primitive_equal(a, b)
    # Explicit loops keep recursion at one frame per nesting level
    if is_sequence(a) and is_sequence(b):
        _check_depth(depth, max_depth)
        if len(a) != len(b):
            return False
        for x, y in zip(a, b):
            if not _deep_equal(x, y, depth + 1, max_depth):
                return False
        return True
    if is_mapping(a) and is_mapping(b):
        _check_depth(depth, max_depth)
        keys = present_keys(a)
        if keys != present_keys(b):
            return False
        for key in keys:
            if not _deep_equal(a[key], b[key], depth + 1, max_depth):
                return False
        return True
    return _opaque_equal(a, b)


def _same(x: Any, y: Any) -> bool:
    return x is y or primitive_equal(x, y)


def _opaque_equal(a: Any, b: Any) -> bool:
    # A sequence never equals a mapping; objects the kernel cannot
    # traverse fall back to their own __eq__.
    if is_sequence(a) or is_sequence(b) or is_mapping(a) or is_mapping(b):
        return False
    return bool(a == b)


def _check_depth(depth: int, max_depth: int) -> None:
    if depth >= max_depth:
        log.warning("max_depth_exceeded", max_depth=max_depth, operation="deep_equal")
        raise MaxDepthExceededError(max_depth)
