"""Domain errors for valuekit.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ValueKitError.
"""

from valuekit.domain.errors.record import (
    FrozenRecordError,
    MissingRequiredFieldError,
    RecordError,
)
from valuekit.domain.errors.value_graph import (
    CircularStructureError,
    MaxDepthExceededError,
    NonFiniteNumberError,
    UnsupportedValueError,
    ValueGraphError,
)

__all__: list[str] = [
    "ValueGraphError",
    "CircularStructureError",
    "MaxDepthExceededError",
    "UnsupportedValueError",
    "NonFiniteNumberError",
    "RecordError",
    "MissingRequiredFieldError",
    "FrozenRecordError",
]
