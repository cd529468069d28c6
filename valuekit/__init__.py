"""
valuekit - Value-object semantics for structured records

Gives records built from nested primitives, sequences and mappings
deterministic equality, hashing, canonical serialization, cloning,
deep merging and multi-key ordering.

Core guarantees:
- Canonical form is independent of key insertion order
- Absent (UNDEFINED) mapping fields are omitted, never rendered as null
- Equal values always hash equal
- Cycles are reported, never silently truncated
"""

from valuekit.application.services import ValueSemanticsService
from valuekit.config import KernelConfig
from valuekit.domain.errors import (
    CircularStructureError,
    FrozenRecordError,
    MaxDepthExceededError,
    MissingRequiredFieldError,
    NonFiniteNumberError,
    RecordError,
    UnsupportedValueError,
    ValueGraphError,
)
from valuekit.domain.exceptions import ValueKitError
from valuekit.domain.models import (
    FieldSpec,
    Record,
    RecordSchema,
    ValidationResult,
    field,
)
from valuekit.domain.primitives import UNDEFINED
from valuekit.domain.services import (
    canonicalize,
    clone,
    compare_by_keys,
    deep_equal,
    hash_value,
    merge_deep,
    merged,
    shallow_equal,
    sort_by_keys,
    to_plain,
)

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "UNDEFINED",
    "ValueKitError",
    "ValueGraphError",
    "CircularStructureError",
    "MaxDepthExceededError",
    "UnsupportedValueError",
    "NonFiniteNumberError",
    "RecordError",
    "MissingRequiredFieldError",
    "FrozenRecordError",
    "canonicalize",
    "to_plain",
    "shallow_equal",
    "deep_equal",
    "hash_value",
    "clone",
    "merge_deep",
    "merged",
    "compare_by_keys",
    "sort_by_keys",
    "Record",
    "RecordSchema",
    "FieldSpec",
    "ValidationResult",
    "field",
    "KernelConfig",
    "ValueSemanticsService",
]
