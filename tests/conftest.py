"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture
def sample_format() -> str:
    """Sample format with a string group and a float."""
    return "<3sf"


@pytest.fixture
def sample_packed() -> bytes:
    """Packed form of (b"abc", 1.01) under the sample format."""
    return bytes([97, 98, 99, 174, 71, 129, 63])


@pytest.fixture
def mixed_format() -> str:
    """Format mixing a string, a repeated integer and a double."""
    return "<10s2bd"


@pytest.fixture
def mixed_values() -> tuple[bytes, int, int, float]:
    """Values matching the mixed format."""
    return (b"0123456789", -3, 7, 2.5)
