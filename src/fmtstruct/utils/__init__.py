"""Utility functions for fmtstruct.

This module provides size calculation helpers.
"""

from __future__ import annotations

from .sizing import group_sizes, size_of, value_count_of

__all__ = [
    "size_of",
    "value_count_of",
    "group_sizes",
]
