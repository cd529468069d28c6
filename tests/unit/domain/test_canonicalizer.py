"""Unit tests for the canonicalizer.

Tests cover:
- Key-order independence and absent-field omission
- UNDEFINED position preservation inside sequences
- ECMAScript number formatting
- Atomic scalar rendering
- Circular reference detection (and shared sub-objects)
- Plain-value export and its round trip
"""

from __future__ import annotations

import datetime
import enum
from decimal import Decimal
from uuid import UUID

import pytest

from valuekit.domain.errors import (
    CircularStructureError,
    MaxDepthExceededError,
    NonFiniteNumberError,
    UnsupportedValueError,
)
from valuekit.domain.primitives import UNDEFINED
from valuekit.domain.primitives.literals import format_number
from valuekit.domain.services.canonicalizer import (
    canonical_key_order,
    canonicalize,
    to_plain,
)


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


class TestMappings:
    """Tests for mapping rendering."""

    def test_keys_sorted_regardless_of_insertion_order(self) -> None:
        """Both insertion orders yield the identical canonical string."""
        first = canonicalize({"name": "Alice", "age": 30})
        second = canonicalize({"age": 30, "name": "Alice"})

        assert first == '{"age":30,"name":"Alice"}'
        assert first == second

    def test_nested_mappings_sorted_at_every_level(self) -> None:
        """Key sorting applies to nested mappings inside sequences too."""
        value = {"z": {"y": [1, {"b": 2, "a": 1}]}, "a": True}

        assert canonicalize(value) == '{"a":true,"z":{"y":[1,{"a":1,"b":2}]}}'

    def test_undefined_field_omitted(self) -> None:
        """A field holding UNDEFINED renders exactly like a missing field."""
        assert canonicalize({"a": 1, "b": UNDEFINED}) == canonicalize({"a": 1})
        assert canonicalize({"a": 1, "b": UNDEFINED}) == '{"a":1}'

    def test_none_field_rendered_as_null(self) -> None:
        """None is a concrete null, not an absent field."""
        assert canonicalize({"a": None}) == '{"a":null}'

    def test_empty_mapping(self) -> None:
        """An empty mapping renders as {}."""
        assert canonicalize({}) == "{}"
        assert canonicalize({"only": UNDEFINED}) == "{}"

    def test_non_str_key_rejected(self) -> None:
        """Mapping keys must be strings."""
        with pytest.raises(UnsupportedValueError, match="mapping keys must be str"):
            canonicalize({1: "a"})

    def test_non_ascii_keys_sorted_after_ascii(self) -> None:
        """Keys sort by code unit, so accented letters follow ASCII."""
        assert canonicalize({"é": 3, "b": 1, "a": 2}) == '{"a":2,"b":1,"é":3}'

    def test_key_order_uses_utf16_code_units(self) -> None:
        """Astral characters sort by their surrogates, before U+FF61."""
        assert canonical_key_order({"\uff61": 1, "\U0001f600": 2}) == ["\U0001f600", "\uff61"]


class TestSequences:
    """Tests for sequence rendering."""

    def test_order_preserved(self) -> None:
        """Sequences keep their element order."""
        assert canonicalize([3, 1, 2]) == "[3,1,2]"

    def test_undefined_renders_null_and_keeps_position(self) -> None:
        """UNDEFINED inside a sequence becomes null in place."""
        assert canonicalize([1, UNDEFINED, None, 4]) == "[1,null,null,4]"

    def test_tuple_renders_like_list(self) -> None:
        """Tuples and lists are both ordered sequences."""
        assert canonicalize((1, "a")) == canonicalize([1, "a"]) == '[1,"a"]'

    def test_empty_sequence(self) -> None:
        """An empty sequence renders as []."""
        assert canonicalize([]) == "[]"


class TestPrimitives:
    """Tests for primitive rendering."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (UNDEFINED, "null"),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (-17, "-17"),
            (10**30, "1000000000000000000000000000000"),
            ("plain", '"plain"'),
            ('quote"back\\slash', '"quote\\"back\\\\slash"'),
            ("line\nbreak", '"line\\nbreak"'),
            ("café", '"café"'),
        ],
    )
    def test_literal(self, value: object, expected: str) -> None:
        """Primitives render as their JSON literal."""
        assert canonicalize(value) == expected

    def test_bool_is_not_a_number(self) -> None:
        """True renders as true, never as 1."""
        assert canonicalize([True, 1]) == "[true,1]"


class TestFormatNumber:
    """Tests for ECMAScript-compatible number formatting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1.0, "1"),
            (-0.0, "0"),
            (0.5, "0.5"),
            (-2.5, "-2.5"),
            (0.1, "0.1"),
            (123.456, "123.456"),
            (100.0, "100"),
            (1e16, "10000000000000000"),
            (1e20, "100000000000000000000"),
            (1.2345678901234568e20, "123456789012345680000"),
            (1e21, "1e+21"),
            (1.5e300, "1.5e+300"),
            (0.000001, "0.000001"),
            (1e-7, "1e-7"),
            (1.5e-7, "1.5e-7"),
            (-3e-10, "-3e-10"),
        ],
    )
    def test_float_formatting(self, value: float, expected: str) -> None:
        """Floats follow Number.prototype.toString output."""
        assert format_number(value) == expected

    def test_integral_float_equals_int_rendering(self) -> None:
        """1 and 1.0 share one canonical form."""
        assert canonicalize({"n": 1.0}) == canonicalize({"n": 1})

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value: float) -> None:
        """NaN and infinities have no JSON literal."""
        with pytest.raises(NonFiniteNumberError):
            canonicalize([value])


class TestAtomicScalars:
    """Tests for atomic scalar rendering."""

    def test_decimal_keeps_its_text(self) -> None:
        """Decimals render as their exact string."""
        assert canonicalize(Decimal("1.50")) == '"1.50"'

    def test_uuid(self) -> None:
        """UUIDs render as their hyphenated string."""
        value = UUID("12345678-1234-5678-1234-567812345678")
        assert canonicalize(value) == '"12345678-1234-5678-1234-567812345678"'

    def test_dates_render_isoformat(self) -> None:
        """Dates and datetimes render in ISO 8601."""
        assert canonicalize(datetime.date(2024, 1, 2)) == '"2024-01-02"'
        assert (
            canonicalize(datetime.datetime(2024, 1, 2, 3, 4, 5))
            == '"2024-01-02T03:04:05"'
        )

    def test_enum_renders_its_value(self) -> None:
        """Enum members render as their value."""
        assert canonicalize({"color": Color.RED}) == '{"color":"red"}'

    @pytest.mark.parametrize("value", [object(), {1, 2}, b"bytes"])
    def test_unsupported_values_rejected(self, value: object) -> None:
        """Values with no canonical form raise UnsupportedValueError."""
        with pytest.raises(UnsupportedValueError):
            canonicalize({"value": value})


class TestCircularReferences:
    """Tests for cycle detection."""

    def test_self_containing_mapping(self) -> None:
        """A mapping containing itself raises instead of hanging."""
        node: dict[str, object] = {"name": "loop"}
        node["self"] = node

        with pytest.raises(CircularStructureError) as exc_info:
            canonicalize(node)

        assert exc_info.value.path == ("self",)
        assert "$.self" in str(exc_info.value)

    def test_self_containing_list(self) -> None:
        """A list containing itself raises too."""
        items: list[object] = [1]
        items.append(items)

        with pytest.raises(CircularStructureError) as exc_info:
            canonicalize(items)

        assert exc_info.value.path == (1,)

    def test_indirect_cycle(self) -> None:
        """A cycle through several nodes is reported at the repeating node."""
        parent: dict[str, object] = {}
        child: dict[str, object] = {"parent": parent}
        parent["children"] = [child]

        with pytest.raises(CircularStructureError) as exc_info:
            canonicalize(parent)

        assert exc_info.value.path == ("children", 0, "parent")

    def test_shared_subobject_is_not_a_cycle(self) -> None:
        """The same object reached through sibling branches is accepted."""
        shared = {"x": 1}

        assert canonicalize({"a": shared, "b": [shared, shared]}) == (
            '{"a":{"x":1},"b":[{"x":1},{"x":1}]}'
        )


class TestMaxDepth:
    """Tests for the traversal depth bound."""

    @staticmethod
    def _nested(levels: int) -> object:
        value: object = 0
        for _ in range(levels):
            value = [value]
        return value

    def test_within_bound(self) -> None:
        """Nesting exactly max_depth containers is allowed."""
        assert canonicalize(self._nested(20), max_depth=20) == "[" * 20 + "0" + "]" * 20

    def test_beyond_bound(self) -> None:
        """Nesting deeper than max_depth raises."""
        with pytest.raises(MaxDepthExceededError) as exc_info:
            canonicalize(self._nested(21), max_depth=20)

        assert exc_info.value.max_depth == 20


class TestToPlain:
    """Tests for plain-value export."""

    def test_export_rules(self) -> None:
        """Export drops absent fields, lists tuples and stringifies scalars."""
        value = {"b": (1, UNDEFINED), "a": UNDEFINED, "c": Decimal("2")}

        plain = to_plain(value)

        assert plain == {"b": [1, None], "c": "2"}
        assert list(plain) == ["b", "c"]

    def test_keys_in_canonical_order(self) -> None:
        """Exported dicts iterate in canonical key order."""
        plain = to_plain({"z": 1, "a": {"y": 2, "b": 3}})

        assert list(plain) == ["a", "z"]
        assert list(plain["a"]) == ["b", "y"]

    def test_enum_exported_as_value(self) -> None:
        """Enum members export as their value."""
        assert to_plain([Color.GREEN]) == ["green"]

    def test_round_trip_is_idempotent(self) -> None:
        """Canonicalizing the export equals canonicalizing the original."""
        value = {
            "when": datetime.date(2024, 5, 6),
            "ratio": 2.0,
            "items": [UNDEFINED, {"k": Color.RED, "gone": UNDEFINED}],
        }

        assert canonicalize(to_plain(value)) == canonicalize(value)

    def test_cycle_rejected(self) -> None:
        """Export shares the canonicalizer's cycle detection."""
        node: dict[str, object] = {}
        node["again"] = node

        with pytest.raises(CircularStructureError):
            to_plain(node)
