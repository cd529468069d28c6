"""Deep patch application.

Merge Rules (per patch key):
- UNDEFINED: no change; the base field is neither removed nor nulled
- sequence: replaces the base value wholesale (a fresh list is installed;
  sequences are never merged element-wise)
- mapping onto a mapping: merged recursively into a copy of the base
  sub-mapping, then installed
- anything else (including None): replaces the base value

A patch that is not a mapping is a no-op.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, TypeVar

from valuekit.domain.primitives.undefined import UNDEFINED
from valuekit.domain.primitives.value_kinds import is_mapping

M = TypeVar("M", bound=MutableMapping[str, Any])


def merge_deep(base: M, patch: Any) -> M:
    """Apply patch to base in place.

    Args:
        base: The mapping to mutate.
        patch: Partial mapping of field overrides.

    Returns:
        base, after the patch has been applied.
    """
    if not is_mapping(patch):
        return base
    for key, patch_value in patch.items():
        if patch_value is UNDEFINED:
            continue
        if isinstance(patch_value, list):
            base[key] = list(patch_value)
        elif isinstance(patch_value, tuple):
            base[key] = patch_value
        elif is_mapping(patch_value) and is_mapping(base.get(key)):
            base[key] = merge_deep(dict(base[key].items()), patch_value)
        else:
            base[key] = patch_value
    return base


def merged(base: Mapping[str, Any], patch: Any) -> dict[str, Any]:
    """Return a new dict holding base with patch applied.

    base is left untouched. Nested mappings touched by the patch are
    copied, untouched ones are shared with base.
    """
    return merge_deep(dict(base.items()), patch)
