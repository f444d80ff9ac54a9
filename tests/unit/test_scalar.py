"""Unit tests for scalar encoding and decoding."""

from __future__ import annotations

import math
import struct

import pytest

from fmtstruct import ByteOrder, FieldType, SizeMismatchError, TruncatedInputError, TypeMismatchError
from fmtstruct.codec.scalar import (
    SCALAR_CODECS,
    decode_scalar,
    decode_string,
    encode_scalar,
    encode_string,
)


class TestIntegers:
    """Test integer encoding."""

    def test_big_and_little(self) -> None:
        """Test byte order of a two-byte integer."""
        assert encode_scalar(FieldType.SHORT, 1, ByteOrder.BIG) == b"\x00\x01"
        assert encode_scalar(FieldType.SHORT, 1, ByteOrder.LITTLE) == b"\x01\x00"

    def test_signed_negative(self) -> None:
        """Test two's complement encoding."""
        assert encode_scalar(FieldType.SCHAR, -1, ByteOrder.LITTLE) == b"\xff"
        assert decode_scalar(FieldType.SCHAR, b"\xff", ByteOrder.LITTLE) == -1
        assert decode_scalar(FieldType.UCHAR, b"\xff", ByteOrder.LITTLE) == 255

    def test_range_limits(self) -> None:
        """Test the extremes of each integer type encode."""
        for field_type in (FieldType.SCHAR, FieldType.USHORT, FieldType.INT, FieldType.ULONGLONG):
            low, high = field_type.int_range()
            for value in (low, high):
                data = encode_scalar(field_type, value, ByteOrder.BIG)
                assert len(data) == field_type.width
                assert decode_scalar(field_type, data, ByteOrder.BIG) == value

    @pytest.mark.parametrize(
        "field_type,value",
        [
            (FieldType.UCHAR, 256),
            (FieldType.UCHAR, -1),
            (FieldType.SCHAR, 128),
            (FieldType.SHORT, -32769),
            (FieldType.UINT, 2**32),
        ],
    )
    def test_out_of_range(self, field_type: FieldType, value: int) -> None:
        """Test out-of-range integers raise TypeMismatchError."""
        with pytest.raises(TypeMismatchError, match="out of range"):
            encode_scalar(field_type, value, ByteOrder.LITTLE)

    @pytest.mark.parametrize("value", ["1", 1.5, None, True, b"\x01"])
    def test_wrong_kind(self, value: object) -> None:
        """Test non-integers are rejected for integer fields."""
        with pytest.raises(TypeMismatchError, match="not an integer") as exc_info:
            encode_scalar(FieldType.INT, value, ByteOrder.LITTLE)

        assert exc_info.value.received is type(value)
        assert exc_info.value.field_type is FieldType.INT


class TestFloats:
    """Test float encoding."""

    def test_single_precision_bytes(self) -> None:
        """Test the bytes of 1.01 as a little-endian float."""
        assert encode_scalar(FieldType.FLOAT, 1.01, ByteOrder.LITTLE) == bytes([174, 71, 129, 63])

    def test_single_precision_rounds(self) -> None:
        """Test decode returns the nearest binary32 value."""
        data = encode_scalar(FieldType.FLOAT, 1.01, ByteOrder.LITTLE)
        value = decode_scalar(FieldType.FLOAT, data, ByteOrder.LITTLE)

        assert value == struct.unpack("<f", struct.pack("<f", 1.01))[0]
        assert value != 1.01

    def test_double_is_exact(self) -> None:
        """Test doubles round-trip without loss."""
        data = encode_scalar(FieldType.DOUBLE, 0.1, ByteOrder.BIG)
        assert decode_scalar(FieldType.DOUBLE, data, ByteOrder.BIG) == 0.1

    def test_half_precision(self) -> None:
        """Test half floats are true binary16."""
        assert encode_scalar(FieldType.HALF, 1.0, ByteOrder.BIG) == b"\x3c\x00"
        assert decode_scalar(FieldType.HALF, b"\x3c\x00", ByteOrder.BIG) == 1.0
        assert decode_scalar(FieldType.HALF, b"\x7b\xff", ByteOrder.BIG) == 65504.0

    def test_integers_accepted(self) -> None:
        """Test ints are accepted for float fields."""
        data = encode_scalar(FieldType.DOUBLE, 3, ByteOrder.LITTLE)
        assert decode_scalar(FieldType.DOUBLE, data, ByteOrder.LITTLE) == 3.0

    def test_special_values(self) -> None:
        """Test infinities and NaN survive."""
        data = encode_scalar(FieldType.FLOAT, math.inf, ByteOrder.LITTLE)
        assert decode_scalar(FieldType.FLOAT, data, ByteOrder.LITTLE) == math.inf

        data = encode_scalar(FieldType.DOUBLE, math.nan, ByteOrder.LITTLE)
        assert math.isnan(decode_scalar(FieldType.DOUBLE, data, ByteOrder.LITTLE))

    def test_overflow(self) -> None:
        """Test finite values too large for the width are rejected."""
        with pytest.raises(TypeMismatchError, match="too large"):
            encode_scalar(FieldType.HALF, 1e6, ByteOrder.LITTLE)

        with pytest.raises(TypeMismatchError, match="too large"):
            encode_scalar(FieldType.FLOAT, 1e300, ByteOrder.LITTLE)

    @pytest.mark.parametrize("value", ["1.0", None, True, b"1"])
    def test_wrong_kind(self, value: object) -> None:
        """Test non-numbers are rejected for float fields."""
        with pytest.raises(TypeMismatchError, match="not a float"):
            encode_scalar(FieldType.DOUBLE, value, ByteOrder.LITTLE)


class TestBoolAndChar:
    """Test bool and char encoding."""

    def test_bool(self) -> None:
        """Test bools encode to one byte."""
        assert encode_scalar(FieldType.BOOL, True, ByteOrder.LITTLE) == b"\x01"
        assert encode_scalar(FieldType.BOOL, False, ByteOrder.LITTLE) == b"\x00"

    def test_bool_decode_nonzero(self) -> None:
        """Test any nonzero byte decodes to True."""
        assert decode_scalar(FieldType.BOOL, b"\x02", ByteOrder.LITTLE) is True
        assert decode_scalar(FieldType.BOOL, b"\x00", ByteOrder.LITTLE) is False

    def test_bool_rejects_int(self) -> None:
        """Test ints are not bools."""
        with pytest.raises(TypeMismatchError, match="not a bool"):
            encode_scalar(FieldType.BOOL, 1, ByteOrder.LITTLE)

    def test_char(self) -> None:
        """Test chars are single bytes."""
        assert encode_scalar(FieldType.CHAR, b"z", ByteOrder.LITTLE) == b"z"
        assert encode_scalar(FieldType.CHAR, "z", ByteOrder.LITTLE) == b"z"
        assert decode_scalar(FieldType.CHAR, b"z", ByteOrder.LITTLE) == b"z"

    def test_char_wrong_length(self) -> None:
        """Test multi-byte chars are rejected."""
        with pytest.raises(TypeMismatchError, match="exactly 1 byte"):
            encode_scalar(FieldType.CHAR, b"ab", ByteOrder.LITTLE)


class TestDecodeWidth:
    """Test decode_scalar input length checks."""

    def test_too_short(self) -> None:
        """Test fewer bytes than the width."""
        with pytest.raises(TruncatedInputError):
            decode_scalar(FieldType.INT, b"\x00\x00", ByteOrder.LITTLE)

    def test_too_long(self) -> None:
        """Test more bytes than the width."""
        with pytest.raises(SizeMismatchError):
            decode_scalar(FieldType.SHORT, b"\x00\x00\x00", ByteOrder.LITTLE)


class TestStrings:
    """Test fixed-length string encoding."""

    def test_exact(self) -> None:
        """Test a string of exactly the declared width."""
        assert encode_string(b"abc", 3) == b"abc"

    def test_truncates_long(self) -> None:
        """Test longer strings are truncated."""
        assert encode_string(b"abcdef", 3) == b"abc"

    def test_rejects_short(self) -> None:
        """Test shorter strings are rejected, not padded."""
        with pytest.raises(TypeMismatchError, match="expected 3 bytes, got 2 bytes"):
            encode_string(b"ab", 3)

    def test_text_is_utf8(self) -> None:
        """Test str values are UTF-8 encoded."""
        assert encode_string("é!", 3) == b"\xc3\xa9!"

    def test_bytearray_and_memoryview(self) -> None:
        """Test other bytes-like values are accepted."""
        assert encode_string(bytearray(b"xyz"), 3) == b"xyz"
        assert encode_string(memoryview(b"xyz"), 2) == b"xy"

    def test_rejects_non_bytes(self) -> None:
        """Test non bytes-like values are rejected."""
        with pytest.raises(TypeMismatchError, match="must be a bytes object"):
            encode_string(123, 3)

    def test_decode_keeps_nulls(self) -> None:
        """Test decoded strings are raw bytes including NULs."""
        assert decode_string(memoryview(b"a\x00b")) == b"a\x00b"


class TestCodecTable:
    """Test the dispatch table."""

    def test_covers_every_scalar_type(self) -> None:
        """Test every non-string field type has a codec."""
        assert set(SCALAR_CODECS) == {ft for ft in FieldType if not ft.is_string}

    def test_read_only(self) -> None:
        """Test the table cannot be mutated."""
        with pytest.raises(TypeError):
            SCALAR_CODECS[FieldType.STRING] = SCALAR_CODECS[FieldType.INT]  # type: ignore[index]
