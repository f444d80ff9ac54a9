"""Per-type scalar encoding and decoding.

Every supported field type has one encoder and one decoder, both
parameterized by byte order. Integers use ``int.to_bytes``/``int.from_bytes``;
floats are reinterpreted as IEEE-754 values of the exact field width
(binary16, binary32 or binary64).
"""

from __future__ import annotations

import numbers
import operator
import struct
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from ..exceptions import SizeMismatchError, TruncatedInputError, TypeMismatchError
from .cursor import BytesLike
from .registry import ByteOrder, FieldType, ValueKind

Value = bytes | int | bool | float

_FLOAT_CODES = MappingProxyType({FieldType.HALF: "e", FieldType.FLOAT: "f", FieldType.DOUBLE: "d"})


@dataclass(frozen=True)
class ScalarCodec:
    """Encoder/decoder pair for one field type."""

    encode: Callable[[FieldType, Any, ByteOrder], bytes]
    decode: Callable[[FieldType, BytesLike, ByteOrder], Value]


def _mismatch(field_type: FieldType, value: Any, reason: str) -> TypeMismatchError:
    return TypeMismatchError(field_type, type(value), reason)


def _as_bytes(field_type: FieldType, value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise _mismatch(field_type, value, "argument must be a bytes object")


# Char


def _encode_char(field_type: FieldType, value: Any, order: ByteOrder) -> bytes:
    data = _as_bytes(field_type, value)
    if len(data) != 1:
        raise _mismatch(field_type, value, f"char requires exactly 1 byte, got {len(data)}")
    return data


def _decode_char(field_type: FieldType, data: BytesLike, order: ByteOrder) -> bytes:
    return bytes(data)


# Integers


def _encode_int(field_type: FieldType, value: Any, order: ByteOrder) -> bytes:
    if isinstance(value, bool):
        raise _mismatch(field_type, value, "required argument is not an integer")
    try:
        number = operator.index(value)
    except TypeError as err:
        raise _mismatch(field_type, value, "required argument is not an integer") from err

    try:
        return number.to_bytes(field_type.width, order.value, signed=field_type.signed)
    except OverflowError as err:
        low, high = field_type.int_range()
        raise _mismatch(
            field_type, value, f"value {number} out of range [{low}, {high}]"
        ) from err


def _decode_int(field_type: FieldType, data: BytesLike, order: ByteOrder) -> int:
    return int.from_bytes(data, order.value, signed=field_type.signed)


# Bool


def _encode_bool(field_type: FieldType, value: Any, order: ByteOrder) -> bytes:
    if not isinstance(value, bool):
        raise _mismatch(field_type, value, "required argument is not a bool")
    return b"\x01" if value else b"\x00"


def _decode_bool(field_type: FieldType, data: BytesLike, order: ByteOrder) -> bool:
    return data[0] != 0


# Floats


def _encode_float(field_type: FieldType, value: Any, order: ByteOrder) -> bytes:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise _mismatch(field_type, value, "required argument is not a float")
    try:
        return struct.pack(order.marker + _FLOAT_CODES[field_type], float(value))
    except (OverflowError, struct.error) as err:
        raise _mismatch(
            field_type, value, f"value {value!r} too large for {field_type.display_name}"
        ) from err


def _decode_float(field_type: FieldType, data: BytesLike, order: ByteOrder) -> float:
    (value,) = struct.unpack(order.marker + _FLOAT_CODES[field_type], data)
    return value


_CODECS_BY_KIND: Mapping[ValueKind, ScalarCodec] = MappingProxyType(
    {
        ValueKind.CHAR: ScalarCodec(_encode_char, _decode_char),
        ValueKind.INT: ScalarCodec(_encode_int, _decode_int),
        ValueKind.BOOL: ScalarCodec(_encode_bool, _decode_bool),
        ValueKind.FLOAT: ScalarCodec(_encode_float, _decode_float),
    }
)

SCALAR_CODECS: Mapping[FieldType, ScalarCodec] = MappingProxyType(
    {
        field_type: _CODECS_BY_KIND[field_type.kind]
        for field_type in FieldType
        if not field_type.is_string
    }
)


def encode_scalar(field_type: FieldType, value: Any, order: ByteOrder) -> bytes:
    """Encode a single scalar value.

    Args:
        field_type: Field type to encode as (must not be STRING)
        value: Value to encode
        order: Byte order for multi-byte types

    Returns:
        Exactly ``field_type.width`` bytes

    Raises:
        TypeMismatchError: If the value's kind or range does not fit the field type

    Example:
        >>> encode_scalar(FieldType.SHORT, 1, ByteOrder.BIG)
        b'\\x00\\x01'
    """
    return SCALAR_CODECS[field_type].encode(field_type, value, order)


def decode_scalar(field_type: FieldType, data: BytesLike, order: ByteOrder) -> Value:
    """Decode a single scalar value from exactly ``field_type.width`` bytes.

    Args:
        field_type: Field type to decode as (must not be STRING)
        data: Encoded bytes
        order: Byte order for multi-byte types

    Returns:
        Decoded value of the type's kind

    Raises:
        TruncatedInputError: If fewer bytes than the width are supplied
        SizeMismatchError: If more bytes than the width are supplied
    """
    if len(data) < field_type.width:
        raise TruncatedInputError(field_type.width, len(data))
    if len(data) > field_type.width:
        raise SizeMismatchError(field_type.width, len(data))
    return SCALAR_CODECS[field_type].decode(field_type, data, order)


def encode_string(value: Any, count: int) -> bytes:
    """Encode a fixed-length byte string.

    A ``str`` is encoded as UTF-8 first. Values longer than ``count`` bytes are
    truncated; shorter values are rejected rather than padded.

    Args:
        value: bytes-like object or str
        count: Declared width of the string group

    Returns:
        Exactly ``count`` bytes

    Raises:
        TypeMismatchError: If the value is not bytes/str or is shorter than ``count``
    """
    data = _as_bytes(FieldType.STRING, value)
    if len(data) < count:
        raise _mismatch(
            FieldType.STRING, value, f"expected {count} bytes, got {len(data)} bytes"
        )
    return data[:count]


def decode_string(data: BytesLike) -> bytes:
    """Decode a fixed-length byte string (the raw bytes, not null-terminated)."""
    return bytes(data)
