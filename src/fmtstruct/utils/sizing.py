"""Format size calculation utilities.

This module provides functions to calculate the encoded size of a format
without packing any values.
"""

from __future__ import annotations

from ..codec.schema import CompiledSchema, compile


def size_of(fmt: str | CompiledSchema) -> int:
    """Calculate the encoded size of a format in bytes.

    The size depends only on the field groups, never on the byte order.

    Args:
        fmt: Format string or compiled schema

    Returns:
        Size in bytes

    Raises:
        FormatError: If the format string is malformed

    Example:
        >>> size_of("<3sf")
        7
        >>> size_of("<10s2bd")
        20
    """
    return compile(fmt).size()


def value_count_of(fmt: str | CompiledSchema) -> int:
    """Calculate how many logical values a format packs or unpacks.

    Args:
        fmt: Format string or compiled schema

    Returns:
        Number of logical values

    Example:
        >>> value_count_of("<10s2bd")
        4
    """
    return compile(fmt).value_count()


def group_sizes(fmt: str | CompiledSchema) -> list[tuple[str, int]]:
    """Get the size in bytes of each field group in a format.

    Args:
        fmt: Format string or compiled schema

    Returns:
        List of (group token, size in bytes) pairs in format order

    Example:
        >>> group_sizes("<10s2bd")
        [('10s', 10), ('2b', 2), ('d', 8)]
    """
    return [(str(group), group.byte_size()) for group in compile(fmt).groups()]
