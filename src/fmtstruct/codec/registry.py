"""Type registry for format strings.

This module defines the closed set of field types a format string may use,
together with their fixed encoded widths, and the supported byte orders.
The tables are built once at import time and never mutated.
"""

from __future__ import annotations

import enum
import sys
from types import MappingProxyType
from typing import Mapping


class ByteOrder(enum.Enum):
    """Byte order of multi-byte numeric fields.

    Values match the ``byteorder`` argument of ``int.to_bytes``/``int.from_bytes``.
    """

    LITTLE = "little"
    BIG = "big"

    @classmethod
    def native(cls) -> ByteOrder:
        """Return the byte order of the running interpreter."""
        return cls(sys.byteorder)

    @property
    def marker(self) -> str:
        """Format-string marker that selects this order explicitly."""
        return "<" if self is ByteOrder.LITTLE else ">"


class ValueKind(enum.Enum):
    """Python kind a field decodes to and accepts for encoding."""

    CHAR = "char"
    INT = "int"
    BOOL = "bool"
    FLOAT = "float"
    BYTES = "bytes"


class FieldType(enum.Enum):
    """Supported field type tags.

    Each member carries its one-character tag, encoded width in bytes,
    decoded value kind, signedness (for integers) and a display name.
    The width of ``STRING`` is per unit; a group's width is ``count`` bytes.
    """

    CHAR = ("c", 1, ValueKind.CHAR, False, "char")
    SCHAR = ("b", 1, ValueKind.INT, True, "signed char")
    UCHAR = ("B", 1, ValueKind.INT, False, "unsigned char")
    BOOL = ("?", 1, ValueKind.BOOL, False, "bool")
    SHORT = ("h", 2, ValueKind.INT, True, "short")
    USHORT = ("H", 2, ValueKind.INT, False, "unsigned short")
    INT = ("i", 4, ValueKind.INT, True, "int")
    UINT = ("I", 4, ValueKind.INT, False, "unsigned int")
    LONG = ("l", 4, ValueKind.INT, True, "long")
    ULONG = ("L", 4, ValueKind.INT, False, "unsigned long")
    LONGLONG = ("q", 8, ValueKind.INT, True, "long long")
    ULONGLONG = ("Q", 8, ValueKind.INT, False, "unsigned long long")
    HALF = ("e", 2, ValueKind.FLOAT, True, "half float")
    FLOAT = ("f", 4, ValueKind.FLOAT, True, "float")
    DOUBLE = ("d", 8, ValueKind.FLOAT, True, "double")
    STRING = ("s", 1, ValueKind.BYTES, False, "bytes")

    def __init__(
        self, tag: str, width: int, kind: ValueKind, signed: bool, display_name: str
    ) -> None:
        self.tag = tag
        self.width = width
        self.kind = kind
        self.signed = signed
        self.display_name = display_name

    @property
    def is_string(self) -> bool:
        """Whether a group of this type decodes to a single byte string."""
        return self.kind is ValueKind.BYTES

    def int_range(self) -> tuple[int, int]:
        """Inclusive range of integers representable by this type.

        Raises:
            TypeError: If the type is not an integer type
        """
        if self.kind is not ValueKind.INT:
            raise TypeError(f"{self.display_name} is not an integer type")
        bits = self.width * 8
        if self.signed:
            return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        return 0, (1 << bits) - 1


_TYPES_BY_TAG: Mapping[str, FieldType] = MappingProxyType(
    {field_type.tag: field_type for field_type in FieldType}
)

ORDER_MARKERS: Mapping[str, ByteOrder | None] = MappingProxyType(
    {
        "<": ByteOrder.LITTLE,
        ">": ByteOrder.BIG,
        "!": ByteOrder.BIG,
        # Native markers resolve when a format is parsed.
        "=": None,
        "@": None,
    }
)

DEFAULT_ORDER = ByteOrder.LITTLE


def find_field_type(tag: str) -> FieldType | None:
    """Look up the field type for a tag character.

    Args:
        tag: One-character type tag (e.g. ``"f"``)

    Returns:
        The matching FieldType, or None if the tag is not supported

    Example:
        >>> find_field_type("h").width
        2
        >>> find_field_type("k") is None
        True
    """
    return _TYPES_BY_TAG.get(tag)


def supported_tags() -> str:
    """Return all supported type tags in registry order."""
    return "".join(_TYPES_BY_TAG)
