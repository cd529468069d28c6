"""Traversal limits for the value-semantics kernel.

Equality and cloning do not track ancestors, so a cyclic input is caught
by this depth bound instead of recursing until the interpreter raises
RecursionError. The default stays well below CPython's default recursion
limit of 1000.
"""

from typing import Final

DEFAULT_MAX_DEPTH: Final[int] = 500
