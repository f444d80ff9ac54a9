"""Unpack engine.

This module provides unpack() and unpack_from(), which decode a byte buffer
into a tuple of values according to a compiled schema, and decode(), which
builds a StructMessage instance from bytes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, TypeVar

from pydantic import ValidationError

from ..exceptions import OffsetRangeError, SchemaError, SizeMismatchError, UnpackError
from .cursor import ByteReader, BytesLike
from .grammar import FieldGroup
from .registry import ByteOrder
from .scalar import Value, decode_scalar, decode_string
from .schema import CompiledSchema, compile

if TYPE_CHECKING:
    from ..models.base import StructMessage

M = TypeVar("M", bound="StructMessage")


def decode_group(reader: ByteReader, group: FieldGroup, order: ByteOrder) -> Iterator[Value]:
    """Decode the logical values of one field group, one at a time.

    Each value is yielded as soon as its bytes are read, so a reader that runs
    out partway through a scalar group still delivers the values before it.

    Args:
        reader: ByteReader positioned at the start of the group
        group: Field group to decode
        order: Byte order for multi-byte types

    Yields:
        Decoded values (one for a string group, ``count`` otherwise)

    Raises:
        TruncatedInputError: If the reader runs out of bytes
    """
    field_type = group.field_type
    if field_type.is_string:
        yield decode_string(reader.read_bytes(group.count))
        return

    for _ in range(group.count):
        yield decode_scalar(field_type, reader.read_bytes(field_type.width), order)


def unpack(fmt: str | CompiledSchema, buffer: BytesLike) -> tuple[Value, ...]:
    """Unpack a buffer according to a format.

    The buffer must be exactly the format's size; both shorter and longer
    buffers are rejected.

    Args:
        fmt: Format string or compiled schema
        buffer: Bytes-like object to decode

    Returns:
        Tuple of decoded values, ``value_count()`` long

    Raises:
        FormatError: If the format string is malformed
        SizeMismatchError: If ``len(buffer)`` differs from the format's size

    Examples:
        ```python
        from fmtstruct import unpack

        unpack("<3sf", b"abc\\xaeG\\x81?")
        # (b'abc', 1.0099999904632568)

        unpack(">H?", b"\\x01\\x00\\x02")
        # (256, True)
        ```
    """
    schema = compile(fmt)
    reader = ByteReader(buffer)
    if reader.bytes_remaining() != schema.size():
        raise SizeMismatchError(schema.size(), reader.bytes_remaining())

    values: list[Value] = []
    order = schema.order()
    for group in schema.groups():
        values.extend(decode_group(reader, group, order))

    return tuple(values)


def unpack_from(
    fmt: str | CompiledSchema, buffer: BytesLike, offset: int = 0
) -> tuple[Value, ...]:
    """Unpack ``buffer[offset:]`` according to a format.

    Args:
        fmt: Format string or compiled schema
        buffer: Bytes-like object to decode
        offset: Byte offset to start at (0 <= offset < len(buffer))

    Returns:
        Tuple of decoded values

    Raises:
        OffsetRangeError: If ``offset`` is outside the buffer
        SizeMismatchError: If the remaining length differs from the format's size
    """
    view = memoryview(buffer).cast("B")
    if offset < 0 or offset >= len(view):
        raise OffsetRangeError(offset, len(view))
    return unpack(fmt, view[offset:])


def decode(message_class: type[M], data: BytesLike) -> M:
    """Decode bytes into a StructMessage using its class's struct_format.

    Decoded values are assigned to model fields in declaration order and
    validated by pydantic.

    Args:
        message_class: StructMessage subclass to decode to
        data: Buffer of exactly the format's size

    Returns:
        Decoded message instance

    Raises:
        SchemaError: If the message class has no struct_format
        SizeMismatchError: If ``len(data)`` differs from the format's size
        UnpackError: If the decoded values fail model validation
    """
    schema = message_class.struct_schema()
    if schema is None:
        raise SchemaError(
            f"{message_class.__name__} has no struct_format. "
            f"Messages used with decode() require struct_format."
        )

    values = unpack(schema, data)
    field_values = dict(zip(message_class.model_fields, values))

    try:
        return message_class(**field_values)
    except ValidationError as e:
        raise UnpackError(f"Failed to construct {message_class.__name__}: {e}") from e
