"""32-bit hash of a value graph's canonical form.

The hash folds the UTF-16 code units of the canonical string through
``h = h * 31 + unit`` with 32-bit wraparound, starting from zero, and
returns the result as an unsigned integer. Because the fold runs over the
canonical form, deep-equal values always hash equal; collisions between
unequal values are possible.

Example:
    >>> hash_value({"a": 1}) == hash_value({"a": 1.0})
    True
"""

from __future__ import annotations

import struct
from typing import Any, Final

from valuekit.domain.primitives.limits import DEFAULT_MAX_DEPTH
from valuekit.domain.services.canonicalizer import canonicalize

HASH_MULTIPLIER: Final[int] = 31
HASH_MASK: Final[int] = 0xFFFFFFFF


def hash_value(value: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> int:
    """Compute the unsigned 32-bit hash of a value graph.

    Args:
        value: Any value graph.
        max_depth: Deepest nesting allowed while canonicalizing.

    Returns:
        Integer in the range [0, 2**32).

    Raises:
        CircularStructureError: Propagated from canonicalization.
        NonFiniteNumberError: Propagated from canonicalization.
        UnsupportedValueError: Propagated from canonicalization.
    """
    return hash_text(canonicalize(value, max_depth=max_depth))


def hash_text(text: str) -> int:
    """Fold the UTF-16 code units of text into an unsigned 32-bit hash."""
    result = 0
    encoded = text.encode("utf-16-le", "surrogatepass")
    for (unit,) in struct.iter_unpack("<H", encoded):
        result = (result * HASH_MULTIPLIER + unit) & HASH_MASK
    return result
