"""Value graph errors raised by the value-semantics kernel.

These errors are raised synchronously while traversing a value graph.
None of them is retried: the whole operation aborts with no partial
output and no partial mutation.
"""

from __future__ import annotations

from valuekit.domain.exceptions import ValueKitError


class ValueGraphError(ValueKitError):
    """Base class for errors found while traversing a value graph."""

    pass


class CircularStructureError(ValueGraphError):
    """Error when a value graph contains a reference cycle.

    Raised by canonicalization (and transitively by hashing, string output
    and plain-value export) when a sequence or mapping is reached again
    while it is still on the active recursion path.

    Attributes:
        path: Keys and indexes from the root to the repeating node.
    """

    def __init__(self, path: tuple[str | int, ...]) -> None:
        """Initialize the error.

        Args:
            path: Keys and indexes from the root to the repeating node.
        """
        self.path = path
        super().__init__(
            f"Circular reference detected at {format_path(path)}"
        )


class MaxDepthExceededError(ValueGraphError):
    """Error when a traversal nests deeper than the configured bound.

    Equality and cloning do not track ancestors, so a cyclic input shows
    up here instead of recursing until the interpreter gives up.

    Attributes:
        max_depth: The bound that was exceeded.
    """

    def __init__(self, max_depth: int) -> None:
        """Initialize the error.

        Args:
            max_depth: The bound that was exceeded.
        """
        self.max_depth = max_depth
        super().__init__(
            f"Value graph nesting exceeds max_depth={max_depth} "
            "(the graph may contain a cycle)"
        )


class UnsupportedValueError(ValueGraphError):
    """Error when a node has no canonical representation.

    Attributes:
        value_type: Name of the offending type.
        detail: What was unsupported about it.
    """

    def __init__(self, value_type: str, detail: str = "unsupported value type") -> None:
        """Initialize the error.

        Args:
            value_type: Name of the offending type.
            detail: What was unsupported about it.
        """
        self.value_type = value_type
        self.detail = detail
        super().__init__(f"Cannot canonicalize {value_type}: {detail}")


class NonFiniteNumberError(ValueGraphError):
    """Error when a float is NaN or infinite.

    Attributes:
        value: The rejected float.
    """

    def __init__(self, value: float) -> None:
        """Initialize the error.

        Args:
            value: The rejected float.
        """
        self.value = value
        super().__init__(
            f"Cannot canonicalize non-finite number {value!r}"
        )


def format_path(path: tuple[str | int, ...]) -> str:
    """Render a traversal path as ``$.key[0].other``."""
    parts = ["$"]
    for step in path:
        if isinstance(step, int):
            parts.append(f"[{step}]")
        else:
            parts.append(f".{step}")
    return "".join(parts)
