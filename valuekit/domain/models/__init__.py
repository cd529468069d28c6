"""Domain models for valuekit.

- Record: sealed keyed mapping with value semantics
- RecordSchema / FieldSpec / field: explicit field declarations
- ValidationResult: outcome of Record.validate()
"""

from valuekit.domain.models.record import FieldSpec, Record, RecordSchema, field
from valuekit.domain.models.validation import ValidationResult, run_validators

__all__: list[str] = [
    "Record",
    "RecordSchema",
    "FieldSpec",
    "field",
    "ValidationResult",
    "run_validators",
]
