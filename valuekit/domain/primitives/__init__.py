"""Value graph primitives.

Provides the UNDEFINED sentinel and the node classification helpers that
every kernel component builds on.
"""

from valuekit.domain.primitives.limits import DEFAULT_MAX_DEPTH
from valuekit.domain.primitives.undefined import UNDEFINED, UndefinedType
from valuekit.domain.primitives.value_kinds import (
    ATOMIC_SCALAR_TYPES,
    is_absent,
    is_mapping,
    is_primitive,
    is_sequence,
    primitive_equal,
    primitive_kind,
)

__all__: list[str] = [
    "DEFAULT_MAX_DEPTH",
    "UNDEFINED",
    "UndefinedType",
    "ATOMIC_SCALAR_TYPES",
    "is_absent",
    "is_mapping",
    "is_primitive",
    "is_sequence",
    "primitive_equal",
    "primitive_kind",
]
