"""Base exception classes for the valuekit domain layer."""


class ValueKitError(Exception):
    """Base exception for all valuekit errors.

    All library-specific exceptions MUST inherit from this class so callers
    can catch every failure raised by the kernel or the record layer with a
    single except clause.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
