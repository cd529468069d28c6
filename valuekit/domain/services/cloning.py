"""Shallow and deep duplication of value graphs.

Primitives are immutable and are never duplicated. Mappings (records
included) are copied into plain dicts; lists stay lists and tuples stay
tuples. Deep cloning is defined over acyclic input; a cycle surfaces as
MaxDepthExceededError.
"""

from __future__ import annotations

from typing import Any, TypeVar

import structlog

from valuekit.domain.errors.value_graph import MaxDepthExceededError
from valuekit.domain.primitives.limits import DEFAULT_MAX_DEPTH
from valuekit.domain.primitives.value_kinds import is_mapping, is_primitive

log = structlog.get_logger()

T = TypeVar("T")


def clone(value: T, *, deep: bool = False, max_depth: int = DEFAULT_MAX_DEPTH) -> T:
    """Duplicate a value graph.

    Args:
        value: Any value graph.
        deep: When False, only the top-level container is copied and its
              elements are shared. When True, every sequence and mapping
              node is copied so the result shares no mutable structure
              with value.
        max_depth: Deepest nesting a deep clone may descend into.

    Returns:
        The duplicated value (or value itself for primitives).

    Raises:
        MaxDepthExceededError: If a deep clone nests beyond max_depth.
    """
    if deep:
        return _deep_clone(value, 0, max_depth)
    if isinstance(value, list):
        return list(value)  # type: ignore[return-value]
    if isinstance(value, tuple):
        return tuple(value)  # type: ignore[return-value]
    if is_mapping(value):
        return dict(value.items())  # type: ignore[attr-defined, return-value]
    return value


def _deep_clone(value: Any, depth: int, max_depth: int) -> Any:
    if is_primitive(value):
        return value
    if isinstance(value, (list, tuple)):
        _check_depth(depth, max_depth)
        items: list[Any] = []
        for item in value:
            items.append(_deep_clone(item, depth + 1, max_depth))
        return items if isinstance(value, list) else tuple(items)
    if is_mapping(value):
        _check_depth(depth, max_depth)
        copied: dict[Any, Any] = {}
        for key, child in value.items():
            copied[key] = _deep_clone(child, depth + 1, max_depth)
        return copied
    return value


def _check_depth(depth: int, max_depth: int) -> None:
    if depth >= max_depth:
        log.warning("max_depth_exceeded", max_depth=max_depth, operation="clone")
        raise MaxDepthExceededError(max_depth)
