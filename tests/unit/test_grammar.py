"""Tests for format string parsing."""

from __future__ import annotations

import sys

import pytest

from fmtstruct import ByteOrder, FieldGroup, FieldType, FormatError, compile
from fmtstruct.codec.grammar import parse_format


class TestParseFormat:
    """Test valid format strings."""

    def test_simple(self) -> None:
        """Test a string group followed by a scalar."""
        order, groups = parse_format("<3sf")

        assert order is ByteOrder.LITTLE
        assert groups == (FieldGroup(3, FieldType.STRING), FieldGroup(1, FieldType.FLOAT))

    def test_multi_digit_count(self) -> None:
        """Test repeat counts with several digits."""
        _, groups = parse_format("<10s2bd")

        assert [str(g) for g in groups] == ["10s", "2b", "d"]
        assert groups[0].count == 10

    def test_no_marker_defaults_to_little(self) -> None:
        """Test the default byte order."""
        order, _ = parse_format("hH")
        assert order is ByteOrder.LITTLE

    def test_network_order(self) -> None:
        """Test '!' resolves to big-endian."""
        order, _ = parse_format("!I")
        assert order is ByteOrder.BIG

    @pytest.mark.parametrize("marker", ["=", "@"])
    def test_native_order(self, marker: str) -> None:
        """Test native markers resolve to the platform order."""
        order, _ = parse_format(f"{marker}I")
        assert order.value == sys.byteorder

    def test_whitespace_between_groups(self) -> None:
        """Test whitespace is ignored between groups."""
        _, groups = parse_format("< 2h  ?")
        assert [str(g) for g in groups] == ["2h", "?"]

    def test_adjacent_groups_not_merged(self) -> None:
        """Test repeated tags stay separate groups."""
        _, groups = parse_format("hh")
        assert groups == (FieldGroup(1, FieldType.SHORT), FieldGroup(1, FieldType.SHORT))


class TestFieldGroup:
    """Test group size and value counting."""

    def test_string_group_is_one_value(self) -> None:
        """Test 's' groups count as a single value."""
        group = FieldGroup(10, FieldType.STRING)

        assert group.byte_size() == 10
        assert group.value_count() == 1

    def test_scalar_group_counts_each(self) -> None:
        """Test scalar groups yield count values."""
        group = FieldGroup(3, FieldType.INT)

        assert group.byte_size() == 12
        assert group.value_count() == 3

    def test_str(self) -> None:
        """Test group rendering."""
        assert str(FieldGroup(1, FieldType.DOUBLE)) == "d"
        assert str(FieldGroup(4, FieldType.CHAR)) == "4c"


class TestFormatErrors:
    """Test malformed format strings."""

    @pytest.mark.parametrize(
        "fmt,match",
        [
            ("", "empty"),
            ("3", "no type character"),
            ("3k", "bad char 'k'"),
            ("3<s", "only allowed as the first character"),
            ("<", "contains no fields"),
            ("   ", "contains no fields"),
            ("0s", "must be positive"),
            ("3 s", "followed directly"),
            ("<h>h", "only allowed as the first character"),
        ],
    )
    def test_malformed(self, fmt: str, match: str) -> None:
        """Test each malformed format raises FormatError."""
        with pytest.raises(FormatError, match=match):
            parse_format(fmt)

    def test_error_position(self) -> None:
        """Test the offending position is reported."""
        with pytest.raises(FormatError) as exc_info:
            parse_format("<2hk")

        assert exc_info.value.position == 3

    def test_non_string_format(self) -> None:
        """Test a non-str format is rejected."""
        with pytest.raises(FormatError, match="must be a str"):
            parse_format(b"<h")  # type: ignore[arg-type]

    def test_oversized_repeat_count(self) -> None:
        """Test a count too long to convert to int raises FormatError."""
        limit = getattr(sys, "get_int_max_str_digits", lambda: 0)()
        if not limit:
            pytest.skip("interpreter has no integer string conversion limit")

        with pytest.raises(FormatError, match="too large") as exc_info:
            compile("<" + "9" * (limit + 1) + "s")

        assert exc_info.value.position == 1
