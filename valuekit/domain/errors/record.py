"""Record lifecycle errors.

Raised by the record layer, never by the kernel's merge or clone
operations.
"""

from __future__ import annotations

from valuekit.domain.exceptions import ValueKitError


class RecordError(ValueKitError):
    """Base class for record lifecycle errors."""

    pass


class MissingRequiredFieldError(RecordError):
    """Error when strict creation is missing a required field.

    Attributes:
        record_type: Name of the record class being created.
        field_name: The required field that was not provided.
    """

    def __init__(self, record_type: str, field_name: str) -> None:
        """Initialize the error.

        Args:
            record_type: Name of the record class being created.
            field_name: The required field that was not provided.
        """
        self.record_type = record_type
        self.field_name = field_name
        super().__init__(
            f'{record_type}: field "{field_name}" must be provided'
        )


class FrozenRecordError(RecordError):
    """Error when code writes to a sealed record outside update().

    Attributes:
        record_type: Name of the record class.
        field_name: The attribute that was assigned or deleted.
    """

    def __init__(self, record_type: str, field_name: str) -> None:
        """Initialize the error.

        Args:
            record_type: Name of the record class.
            field_name: The attribute that was assigned or deleted.
        """
        self.record_type = record_type
        self.field_name = field_name
        super().__init__(
            f"{record_type} is sealed: cannot modify field {field_name!r} "
            "(use update() or copy())"
        )
