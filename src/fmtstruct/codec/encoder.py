"""Pack engine.

This module provides pack() and pack_into(), which encode a sequence of
values into bytes according to a compiled schema, and encode(), which packs
a StructMessage instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from ..exceptions import ArityError, OffsetRangeError, SchemaError, TypeMismatchError
from .cursor import ByteWriter, BytesLike
from .scalar import encode_scalar, encode_string
from .schema import CompiledSchema, compile

if TYPE_CHECKING:
    from ..models.base import StructMessage


def pack_values(schema: CompiledSchema, values: Sequence[Any]) -> bytes:
    """Pack a sequence of values with an already compiled schema.

    Args:
        schema: Compiled schema to pack with
        values: One value per logical field, in format order

    Returns:
        Packed bytes, exactly ``schema.size()`` long

    Raises:
        ArityError: If ``len(values) != schema.value_count()``
        TypeMismatchError: If any value does not fit its field; no output is produced
    """
    if len(values) != schema.value_count():
        raise ArityError(schema.value_count(), len(values))

    writer = ByteWriter()
    order = schema.order()
    index = 0

    for group in schema.groups():
        field_type = group.field_type
        try:
            if field_type.is_string:
                writer.write_bytes(encode_string(values[index], group.count))
                index += 1
                continue

            for _ in range(group.count):
                writer.write_bytes(encode_scalar(field_type, values[index], order))
                index += 1
        except TypeMismatchError as err:
            raise err.at_index(index) from err

    return writer.to_bytes()


def pack(fmt: str | CompiledSchema, *values: Any) -> bytes:
    """Pack values into bytes according to a format.

    Args:
        fmt: Format string or compiled schema
        *values: One value per logical field, in format order

    Returns:
        Packed bytes

    Raises:
        FormatError: If the format string is malformed
        ArityError: If the number of values does not match the format
        TypeMismatchError: If a value does not fit its field

    Examples:
        ```python
        from fmtstruct import pack

        pack("<3sf", b"abc", 1.01)
        # b'abc\\xaeG\\x81?'

        pack(">hH", -2, 2)
        # b'\\xff\\xfe\\x00\\x02'
        ```
    """
    return pack_values(compile(fmt), values)


def pack_into(
    fmt: str | CompiledSchema, buffer: BytesLike, offset: int, *values: Any
) -> bytes:
    """Pack values and write them into a buffer starting at ``offset``.

    The buffer grows (zero-filled) when ``offset + size`` exceeds its length.
    A bytearray is updated in place; other bytes-like buffers are copied first.
    The values are packed before anything is written, so on error the buffer
    is left untouched.

    Args:
        fmt: Format string or compiled schema
        buffer: Target buffer
        offset: Byte offset to write at (must be >= 0)
        *values: One value per logical field, in format order

    Returns:
        The whole resulting buffer as bytes

    Raises:
        OffsetRangeError: If ``offset`` is negative
        ArityError: If the number of values does not match the format
        TypeMismatchError: If a value does not fit its field

    Example:
        >>> pack_into("<3sf", b"\\xff\\xff\\xff\\xff", 2, b"abc", 1.01)
        b'\\xff\\xffabc\\xaeG\\x81?'
    """
    if offset < 0:
        raise OffsetRangeError(offset)

    packed = pack(fmt, *values)

    target = buffer if isinstance(buffer, bytearray) else bytearray(buffer)
    end = offset + len(packed)
    if end > len(target):
        target.extend(bytes(end - len(target)))
    target[offset:end] = packed

    return bytes(target)


def encode(message: StructMessage) -> bytes:
    """Encode a StructMessage instance using its class's struct_format.

    Fields are packed in declaration order, one logical value per field.

    Args:
        message: StructMessage instance to encode

    Returns:
        Packed bytes

    Raises:
        SchemaError: If the message class has no struct_format
        TypeMismatchError: If a field value does not fit its format field

    Examples:
        ```python
        from fmtstruct import StructMessage, encode

        class Header(StructMessage):
            struct_format: ClassVar[str] = ">4sHH"

            magic: bytes
            version: int
            flags: int

        encode(Header(magic=b"GRIM", version=3, flags=0))
        # b'GRIM\\x00\\x03\\x00\\x00'
        ```
    """
    message_class = type(message)
    schema = message_class.struct_schema()
    if schema is None:
        raise SchemaError(
            f"{message_class.__name__} has no struct_format. "
            f"Messages used with encode() require struct_format."
        )

    values = [getattr(message, name) for name in message_class.model_fields]
    return pack_values(schema, values)
