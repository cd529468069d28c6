"""Canonical form of value graphs.

This module turns a value graph into a deterministic string (and, for
export, a deterministic plain value) that does not depend on the order
in which mappings were populated.

Canonical Form Rules:
- Mapping keys are emitted in ascending order of their UTF-16 code units
- Mapping fields whose value is UNDEFINED are omitted entirely
- UNDEFINED inside a sequence (or at the top level) renders as null
- Sequences keep their order and length
- Numbers follow the ECMAScript number-to-string rules, so 1.0 renders as
  1 and 1e-7 renders as 1e-7
- Strings are JSON strings with non-ASCII characters left unescaped
- Atomic scalars render as JSON strings; Enum members render as their value

Failure Modes:
- CircularStructureError: a node is reached again while still on the
  active path. Ancestors are tracked by identity and released on return,
  so a node shared by two sibling branches is accepted.
- NonFiniteNumberError: NaN or infinity has no JSON literal.
- UnsupportedValueError: non-str mapping keys or untraversable objects.

Example:
    >>> canonicalize({"name": "Alice", "age": 30})
    '{"age":30,"name":"Alice"}'
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

import structlog

from valuekit.domain.errors.value_graph import (
    CircularStructureError,
    MaxDepthExceededError,
    NonFiniteNumberError,
    UnsupportedValueError,
    format_path,
)
from valuekit.domain.primitives.limits import DEFAULT_MAX_DEPTH
from valuekit.domain.primitives.literals import (
    leaf_literal,
    scalar_text,
    utf16_sort_key,
)
from valuekit.domain.primitives.undefined import UNDEFINED
from valuekit.domain.primitives.value_kinds import is_mapping, is_sequence

log = structlog.get_logger()


def canonicalize(value: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Render a value graph as its canonical string.

    Args:
        value: Any value graph.
        max_depth: Deepest sequence/mapping nesting allowed.

    Returns:
        The canonical string form.

    Raises:
        CircularStructureError: If the graph contains a reference cycle.
        NonFiniteNumberError: If the graph contains NaN or infinity.
        UnsupportedValueError: If a node cannot be rendered.
        MaxDepthExceededError: If nesting exceeds max_depth.
    """
    parts: list[str] = []
    _Traversal(max_depth).render(value, parts)
    return "".join(parts)


def to_plain(value: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Export a value graph as plain JSON-compatible Python values.

    Uses the same traversal rules as canonicalize(): mappings become dicts
    with keys inserted in canonical order and UNDEFINED fields dropped,
    sequences become lists, UNDEFINED inside a sequence becomes None and
    atomic scalars become strings. Canonicalizing the result gives the
    same string as canonicalizing the input.

    Args:
        value: Any value graph.
        max_depth: Deepest sequence/mapping nesting allowed.

    Returns:
        A structure of dict, list, str, int, float, bool and None.

    Raises:
        CircularStructureError: If the graph contains a reference cycle.
        NonFiniteNumberError: If the graph contains NaN or infinity.
        UnsupportedValueError: If a node cannot be exported.
        MaxDepthExceededError: If nesting exceeds max_depth.
    """
    return _Traversal(max_depth).export(value)


def canonical_key_order(mapping: Mapping[Any, Any]) -> list[str]:
    """Return the keys of mapping in canonical order.

    Sorting by UTF-16 code units keeps the order identical to what a
    JavaScript Array.prototype.sort() would produce, including for
    characters outside the Basic Multilingual Plane.

    Raises:
        UnsupportedValueError: If any key is not a str.
    """
    keys = list(mapping.keys())
    for key in keys:
        if not isinstance(key, str):
            raise UnsupportedValueError(
                type(key).__name__, "mapping keys must be str"
            )
    return sorted(keys, key=utf16_sort_key)


class _Traversal:
    """One canonicalization pass with its active ancestor set."""

    def __init__(self, max_depth: int) -> None:
        self._max_depth = max_depth
        self._active: set[int] = set()
        self._path: list[str | int] = []

    def render(self, value: Any, out: list[str]) -> None:
        if isinstance(value, Enum):
            self.render(value.value, out)
        elif is_sequence(value):
            with self._entered(value):
                out.append("[")
                for index, item in enumerate(value):
                    if index:
                        out.append(",")
                    self._path.append(index)
                    self.render(item, out)
                    self._path.pop()
                out.append("]")
        elif is_mapping(value):
            with self._entered(value):
                out.append("{")
                first = True
                for key in canonical_key_order(value):
                    child = value[key]
                    if child is UNDEFINED:
                        continue
                    if not first:
                        out.append(",")
                    first = False
                    out.append(json.dumps(key, ensure_ascii=False))
                    out.append(":")
                    self._path.append(key)
                    self.render(child, out)
                    self._path.pop()
                out.append("}")
        else:
            out.append(leaf_literal(value))

    def export(self, value: Any) -> Any:
        if isinstance(value, Enum):
            return self.export(value.value)
        if is_sequence(value):
            with self._entered(value):
                items: list[Any] = []
                for index, item in enumerate(value):
                    self._path.append(index)
                    items.append(self.export(item))
                    self._path.pop()
            return items
        if is_mapping(value):
            with self._entered(value):
                result: dict[str, Any] = {}
                for key in canonical_key_order(value):
                    child = value[key]
                    if child is UNDEFINED:
                        continue
                    self._path.append(key)
                    result[key] = self.export(child)
                    self._path.pop()
            return result
        if value is None or value is UNDEFINED:
            return None
        if isinstance(value, float):
            if not math.isfinite(value):
                raise NonFiniteNumberError(value)
            return value
        if isinstance(value, (bool, int, str)):
            return value
        return scalar_text(value)

    def _entered(self, node: Any) -> "_ActiveNode":
        node_id = id(node)
        if node_id in self._active:
            path = tuple(self._path)
            log.warning("circular_structure_detected", path=format_path(path))
            raise CircularStructureError(path)
        if len(self._active) >= self._max_depth:
            log.warning("max_depth_exceeded", max_depth=self._max_depth)
            raise MaxDepthExceededError(self._max_depth)
        return _ActiveNode(self._active, node_id)


class _ActiveNode:
    """Keeps a node on the active path for the duration of a with block.

    The node is only released on normal exit; on error the whole
    traversal is abandoned.
    """

    def __init__(self, active: set[int], node_id: int) -> None:
        self._active = active
        self._node_id = node_id

    def __enter__(self) -> None:
        self._active.add(self._node_id)

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        if exc_type is None:
            self._active.discard(self._node_id)
        return False

