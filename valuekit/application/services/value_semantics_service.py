"""Value semantics service: the kernel under an explicit KernelConfig.

The kernel functions in valuekit.domain.services are pure and take their
traversal bound as an argument. This service binds them to one
KernelConfig (by default read from the environment) and logs failed
operations with their context before re-raising.

Usage:
    from valuekit.application.services import ValueSemanticsService

    service = ValueSemanticsService()
    service.canonicalize({"b": 1, "a": 2})  # '{"a":2,"b":1}'
    service.equals(record_a, record_b)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, MutableMapping, Sequence
from typing import Any, TypeVar

from valuekit.application.services.base import LoggingMixin
from valuekit.config.kernel_config import KernelConfig
from valuekit.domain.errors.value_graph import ValueGraphError
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
from valuekit.domain.services.ordering import Ordering

T = TypeVar("T")


class ValueSemanticsService(LoggingMixin):
    """Runs kernel operations with a configured traversal bound.

    Attributes:
        config: The KernelConfig every operation uses.
    """

    def __init__(self, config: KernelConfig | None = None) -> None:
        """Initialize the service.

        Args:
            config: Kernel configuration. Defaults to
                KernelConfig.from_environment().
        """
        self._config = config if config is not None else KernelConfig.from_environment()
        self._init_logger(component="value_semantics")

    @property
    def config(self) -> KernelConfig:
        return self._config

    def canonicalize(self, value: Any) -> str:
        """Return the canonical string form of value.

        Raises:
            CircularStructureError: If value contains a reference cycle.
            ValueGraphError: For any other unrenderable graph.
        """
        return self._run(
            "canonicalize",
            lambda: canonicalize(value, max_depth=self._config.max_depth),
        )

    def to_plain(self, value: Any) -> Any:
        """Return value as plain JSON values in canonical key order."""
        return self._run(
            "to_plain",
            lambda: to_plain(value, max_depth=self._config.max_depth),
        )

    def equals(self, a: Any, b: Any, *, deep: bool = True) -> bool:
        """Compare a and b structurally (deep) or one level deep."""
        if not deep:
            return shallow_equal(a, b)
        return self._run(
            "deep_equal",
            lambda: deep_equal(a, b, max_depth=self._config.max_depth),
        )

    def hash(self, value: Any) -> int:
        """Return the unsigned 32-bit hash of value's canonical form."""
        return self._run(
            "hash_value",
            lambda: hash_value(value, max_depth=self._config.max_depth),
        )

    def clone(self, value: T, *, deep: bool = False) -> T:
        """Duplicate value one level deep, or fully when deep is True."""
        return self._run(
            "clone",
            lambda: clone(value, deep=deep, max_depth=self._config.max_depth),
        )

    def merge(
        self,
        base: MutableMapping[str, Any],
        patch: Any,
        *,
        in_place: bool = False,
    ) -> MutableMapping[str, Any]:
        """Apply patch to base.

        Args:
            base: The mapping to patch.
            patch: Partial mapping of overrides.
            in_place: Mutate base instead of returning a patched copy.

        Returns:
            base itself when in_place, otherwise a new dict.
        """
        if in_place:
            return merge_deep(base, patch)
        return merged(base, patch)

    def compare(
        self,
        a: Mapping[str, Any],
        b: Mapping[str, Any],
        order_by: Sequence[str] | None = None,
    ) -> Ordering:
        """Order a against b by order_by (or a's own keys)."""
        return compare_by_keys(a, b, order_by)

    def sort(
        self,
        values: Iterable[T],
        order_by: Sequence[str] | None = None,
        *,
        reverse: bool = False,
    ) -> list[T]:
        """Return values sorted by order_by."""
        return sort_by_keys(values, order_by, reverse=reverse)

    def _run(self, operation: str, action: Callable[[], T]) -> T:
        try:
            return action()
        except ValueGraphError as error:
            self._log_operation(operation).warning(
                "value_graph_rejected",
                error=str(error),
                error_type=type(error).__name__,
                max_depth=self._config.max_depth,
            )
            raise
