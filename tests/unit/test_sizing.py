"""Tests for size calculation helpers."""

from __future__ import annotations

import pytest

from fmtstruct import FormatError, compile, group_sizes, size_of, value_count_of


class TestSizing:
    """Test size_of, value_count_of and group_sizes."""

    def test_size_of(self) -> None:
        """Test sizes of a few formats."""
        assert size_of("<3sf") == 7
        assert size_of("<10s2bd") == 20
        assert size_of(">?") == 1
        assert size_of("3e") == 6

    def test_value_count_of(self) -> None:
        """Test strings count once, scalars count per repeat."""
        assert value_count_of("<10s2bd") == 4
        assert value_count_of("4c") == 4
        assert value_count_of("4s") == 1

    def test_group_sizes(self) -> None:
        """Test the per-group breakdown."""
        assert group_sizes("<10s2bd") == [("10s", 10), ("2b", 2), ("d", 8)]

    def test_accepts_schema(self) -> None:
        """Test helpers accept a compiled schema."""
        schema = compile(">4sHH")

        assert size_of(schema) == 8
        assert value_count_of(schema) == 3

    def test_malformed(self) -> None:
        """Test malformed formats raise FormatError."""
        with pytest.raises(FormatError):
            size_of("3")
