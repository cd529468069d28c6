"""
Domain layer - Pure value-semantics logic for valuekit.

This layer contains:
- Primitives (UNDEFINED sentinel, value kind classification)
- Services (the value-semantics kernel)
- Models (Record and its field declarations)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure or
config. Only stdlib, typing and structlog imports are allowed.
"""

from valuekit.domain.exceptions import ValueKitError
from valuekit.domain.models import Record
from valuekit.domain.primitives import UNDEFINED

__all__: list[str] = [
    "ValueKitError",
    "Record",
    "UNDEFINED",
]
