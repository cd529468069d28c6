"""Value-semantics kernel.

Pure, synchronous functions over in-memory value graphs:

- canonicalizer: canonical string and plain-value export
- equality: shallow and deep structural comparison
- hashing: 32-bit hash of the canonical form
- cloning: shallow and deep duplication
- merging: deep patch application
- ordering: multi-key comparison and sorting
"""

from valuekit.domain.services.canonicalizer import (
    canonical_key_order,
    canonicalize,
    to_plain,
)
from valuekit.domain.primitives.literals import format_number
from valuekit.domain.services.cloning import clone
from valuekit.domain.services.equality import deep_equal, present_keys, shallow_equal
from valuekit.domain.services.hashing import hash_text, hash_value
from valuekit.domain.services.merging import merge_deep, merged
from valuekit.domain.services.ordering import compare_by_keys, sort_by_keys

__all__: list[str] = [
    "canonicalize",
    "canonical_key_order",
    "format_number",
    "to_plain",
    "shallow_equal",
    "deep_equal",
    "present_keys",
    "hash_value",
    "hash_text",
    "clone",
    "merge_deep",
    "merged",
    "compare_by_keys",
    "sort_by_keys",
]
