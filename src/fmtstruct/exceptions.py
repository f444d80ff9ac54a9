"""Exception hierarchy for fmtstruct.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from StructCodecError for easy catching of any fmtstruct error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .codec.registry import FieldType


class StructCodecError(Exception):
    """Base exception for all fmtstruct errors."""

    pass


class FormatError(StructCodecError):
    """Raised when a format string does not match the format grammar.

    Examples:
        - Empty format string
        - Unknown type character (e.g. ``"3k"``)
        - Repeat count with no following type character (e.g. ``"3"``)
        - Byte order marker that is not the first character (e.g. ``"3<s"``)
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        super().__init__(message)


class SchemaError(StructCodecError):
    """Raised when a StructMessage class is incompatible with its format.

    Examples:
        - Missing struct_format on a message class used for encode/decode
        - Number of model fields differs from the format's logical value count
    """

    pass


class PackError(StructCodecError):
    """Base class for errors raised while packing values."""

    pass


class ArityError(PackError):
    """Raised when pack receives a different number of values than the format expects."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"pack expected {expected} items for packing (got {actual})")


class TypeMismatchError(PackError):
    """Raised when a value cannot be encoded as its field's type.

    Examples:
        - A str passed for an integer field
        - An integer outside the field's range
        - A float too large for a half or single precision field
        - A string shorter than its field's declared width

    Attributes:
        field_type: FieldType the value was destined for
        received: Python type of the offending value
        index: Logical index of the value in the pack call (None if not known)
        reason: Human readable description of the mismatch
    """

    def __init__(
        self,
        field_type: FieldType,
        received: type,
        reason: str,
        index: int | None = None,
    ) -> None:
        self.field_type = field_type
        self.received = received
        self.reason = reason
        self.index = index
        location = f"argument {index} " if index is not None else "argument "
        super().__init__(
            f"{location}for '{field_type.tag}' ({field_type.display_name}): {reason} "
            f"(got {received.__name__})"
        )

    def at_index(self, index: int) -> TypeMismatchError:
        """Return a copy of this error bound to a logical value index."""
        return TypeMismatchError(self.field_type, self.received, self.reason, index=index)


class UnpackError(StructCodecError):
    """Base class for errors raised while unpacking a buffer."""

    pass


class SizeMismatchError(UnpackError):
    """Raised when a buffer's length is not exactly the size the format requires."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"unpack requires a buffer of {expected} bytes (got {actual})")


class TruncatedInputError(UnpackError):
    """Raised when fewer bytes remain than the next field needs."""

    def __init__(self, needed: int, available: int, position: int = 0) -> None:
        self.needed = needed
        self.available = available
        self.position = position
        super().__init__(
            f"Truncated input at byte {position}: need {needed} bytes, have {available}"
        )


class StreamStalledError(UnpackError):
    """Raised when a streaming unpack producer gives up on an idle consumer."""

    def __init__(self, waited: float) -> None:
        self.waited = waited
        super().__init__(f"stream consumer did not drain any value for {waited:.2f} seconds")


class OffsetRangeError(StructCodecError):
    """Raised when an offset is negative or outside the target buffer."""

    def __init__(self, offset: int, length: int | None = None) -> None:
        self.offset = offset
        self.length = length
        if length is None:
            message = f"offset must be >= 0 (got {offset})"
        else:
            message = f"offset {offset} out of range for {length}-byte buffer"
        super().__init__(message)
