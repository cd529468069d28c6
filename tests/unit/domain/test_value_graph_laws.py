"""Property tests for the value-semantics laws.

Uses Hypothesis to generate acyclic value graphs and check, for every
draw:
- deep_equal(a, b) holds exactly when the canonical forms match
- deep-equal values hash equal
- deep clones are deep-equal and structurally independent
- exporting to plain values and canonicalizing again is idempotent
- empty and all-UNDEFINED patches leave a mapping unchanged
"""

from __future__ import annotations

from typing import Any

import hypothesis.strategies as st
from hypothesis import given, settings

from valuekit.domain.primitives import UNDEFINED
from valuekit.domain.services.canonicalizer import canonicalize, to_plain
from valuekit.domain.services.cloning import clone
from valuekit.domain.services.equality import deep_equal
from valuekit.domain.services.hashing import hash_value
from valuekit.domain.services.merging import merge_deep, merged

leaves = st.one_of(
    st.none(),
    st.just(UNDEFINED),
    st.booleans(),
    st.integers(min_value=-(2**64), max_value=2**64),
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(max_size=8),
    st.decimals(allow_nan=False, allow_infinity=False, places=2, min_value=-1000, max_value=1000),
)

keys = st.text(max_size=4)

graphs = st.recursive(
    leaves,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.lists(children, max_size=4).map(tuple),
        st.dictionaries(keys, children, max_size=4),
    ),
    max_leaves=20,
)

mappings = st.dictionaries(keys, graphs, max_size=5)

# Small pools make equal and near-equal pairs likely
close_leaves = st.sampled_from([0, 0.0, 1, 1.0, True, False, None, UNDEFINED, "1", ""])
close_graphs = st.recursive(
    close_leaves,
    lambda children: st.one_of(
        st.lists(children, max_size=2),
        st.dictionaries(st.sampled_from(["a", "b"]), children, max_size=2),
    ),
    max_leaves=6,
)


def _reinserted(value: Any) -> Any:
    """Rebuild value with every mapping populated in reverse key order."""
    if isinstance(value, dict):
        return {key: _reinserted(value[key]) for key in reversed(list(value))}
    if isinstance(value, list):
        return [_reinserted(item) for item in value]
    if isinstance(value, tuple):
        return tuple(_reinserted(item) for item in value)
    return value


def _mutate(value: Any) -> None:
    """Change every list and dict node of value in place."""
    if isinstance(value, dict):
        for child in list(value.values()):
            _mutate(child)
        value["\x00added"] = True
    elif isinstance(value, list):
        for child in list(value):
            _mutate(child)
        value.append("added")
    elif isinstance(value, tuple):
        for child in value:
            _mutate(child)


class TestEqualityLaws:
    """Equality, canonical form and hash stay consistent."""

    @given(graphs, graphs)
    @settings(deadline=None)
    def test_equality_matches_canonical_equality(self, a: Any, b: Any) -> None:
        """Arbitrary pairs agree on equality and canonical equality."""
        assert deep_equal(a, b) == (canonicalize(a) == canonicalize(b))

    @given(close_graphs, close_graphs)
    @settings(deadline=None)
    def test_equality_matches_canonical_equality_on_close_pairs(self, a: Any, b: Any) -> None:
        """Pairs drawn from a small pool agree as well."""
        same = deep_equal(a, b)
        assert same == (canonicalize(a) == canonicalize(b))
        if same:
            assert hash_value(a) == hash_value(b)

    @given(graphs)
    @settings(deadline=None)
    def test_key_order_does_not_matter(self, value: Any) -> None:
        """Reinserting mapping keys keeps equality and hash."""
        other = _reinserted(value)

        assert deep_equal(value, other)
        assert canonicalize(value) == canonicalize(other)
        assert hash_value(value) == hash_value(other)

    @given(graphs)
    @settings(deadline=None)
    def test_plain_export_is_equal_and_hashes_equal(self, value: Any) -> None:
        """A graph equals its plain-value export."""
        plain = to_plain(value)

        assert deep_equal(value, plain)
        assert hash_value(value) == hash_value(plain)


class TestCloneLaws:
    """Deep clones are equal and independent."""

    @given(graphs)
    @settings(deadline=None)
    def test_deep_clone_is_equal(self, value: Any) -> None:
        """deep_equal(a, clone(a, deep=True))."""
        assert deep_equal(value, clone(value, deep=True))

    @given(graphs)
    @settings(deadline=None)
    def test_deep_clone_is_independent(self, value: Any) -> None:
        """Mutating every node of the clone leaves the source unchanged."""
        before = canonicalize(value)
        copied = clone(value, deep=True)

        _mutate(copied)

        assert canonicalize(value) == before


class TestRoundTripLaws:
    """Plain-value export is a fixed point of canonicalization."""

    @given(graphs)
    @settings(deadline=None)
    def test_round_trip_is_idempotent(self, value: Any) -> None:
        """canonicalize(to_plain(a)) == canonicalize(a)."""
        plain = to_plain(value)

        assert canonicalize(plain) == canonicalize(value)
        assert to_plain(plain) == plain


class TestMergeLaws:
    """Patches that carry no values change nothing."""

    @given(mappings)
    @settings(deadline=None)
    def test_empty_patch_is_noop(self, base: dict[str, Any]) -> None:
        """merge_deep(base, {}) leaves base canonically unchanged."""
        before = canonicalize(base)

        merge_deep(base, {})

        assert canonicalize(base) == before

    @given(mappings)
    @settings(deadline=None)
    def test_all_undefined_patch_is_noop(self, base: dict[str, Any]) -> None:
        """A patch of UNDEFINED values leaves base canonically unchanged."""
        before = canonicalize(base)

        merge_deep(base, {key: UNDEFINED for key in base})

        assert canonicalize(base) == before

    @given(mappings, mappings)
    @settings(deadline=None)
    def test_merged_leaves_base_untouched(
        self, base: dict[str, Any], patch: dict[str, Any]
    ) -> None:
        """The copying merge never mutates its base."""
        before = canonicalize(base)

        merged(base, patch)

        assert canonicalize(base) == before
