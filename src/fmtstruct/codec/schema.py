"""Compiled schemas for format strings.

A CompiledSchema caches everything derived from a format string (byte order,
field groups, encoded size and logical value count) so that repeated pack and
unpack calls never re-parse the format.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any

from .grammar import FieldGroup, parse_format
from .registry import ByteOrder

if TYPE_CHECKING:
    from .config import StreamConfig
    from .cursor import BytesLike
    from .scalar import Value
    from .stream import UnpackStream

logger = logging.getLogger(__name__)

COMPILE_CACHE_SIZE = 256


class CompiledSchema:
    """Immutable, precomputed form of a format string.

    Instances are never mutated after construction and may be shared across
    threads without locking.

    Example:
        >>> schema = CompiledSchema("<3sf")
        >>> schema.size(), schema.value_count()
        (7, 2)
        >>> schema.unpack(schema.pack(b"abc", 1.5))
        (b'abc', 1.5)
    """

    __slots__ = ("_format", "_order", "_groups", "_size", "_value_count")

    def __init__(self, fmt: str) -> None:
        """Compile a format string.

        Args:
            fmt: Format string to compile

        Raises:
            FormatError: If the string does not match the format grammar
        """
        order, groups = parse_format(fmt)
        object.__setattr__(self, "_format", fmt)
        object.__setattr__(self, "_order", order)
        object.__setattr__(self, "_groups", groups)
        object.__setattr__(self, "_size", sum(group.byte_size() for group in groups))
        object.__setattr__(self, "_value_count", sum(group.value_count() for group in groups))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def format(self) -> str:
        """The format string this schema was compiled from."""
        return self._format

    def order(self) -> ByteOrder:
        """Resolved byte order."""
        return self._order

    def groups(self) -> tuple[FieldGroup, ...]:
        """Field groups in declaration order."""
        return self._groups

    def size(self) -> int:
        """Total encoded size in bytes."""
        return self._size

    def value_count(self) -> int:
        """Number of logical values packed or unpacked."""
        return self._value_count

    def pack(self, *values: Any) -> bytes:
        """Pack values into bytes. See :func:`fmtstruct.codec.encoder.pack`."""
        from .encoder import pack_values

        return pack_values(self, values)

    def pack_into(self, buffer: BytesLike, offset: int, *values: Any) -> bytes:
        """Pack values into a buffer at an offset. See :func:`fmtstruct.codec.encoder.pack_into`."""
        from .encoder import pack_into

        return pack_into(self, buffer, offset, *values)

    def unpack(self, buffer: BytesLike) -> tuple[Value, ...]:
        """Unpack a buffer of exactly ``size()`` bytes."""
        from .decoder import unpack

        return unpack(self, buffer)

    def unpack_from(self, buffer: BytesLike, offset: int = 0) -> tuple[Value, ...]:
        """Unpack ``buffer[offset:]``, which must be exactly ``size()`` bytes."""
        from .decoder import unpack_from

        return unpack_from(self, buffer, offset)

    def iter_unpack(
        self, buffer: BytesLike, config: StreamConfig | None = None
    ) -> UnpackStream:
        """Stream decoded values from a buffer. See :class:`fmtstruct.codec.stream.UnpackStream`."""
        from .stream import UnpackStream

        return UnpackStream(self, buffer, config)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompiledSchema):
            return NotImplemented
        return self._order is other._order and self._groups == other._groups

    def __hash__(self) -> int:
        return hash((self._order, self._groups))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._format!r})"


@functools.lru_cache(maxsize=COMPILE_CACHE_SIZE)
def _compile_cached(fmt: str) -> CompiledSchema:
    schema = CompiledSchema(fmt)
    logger.debug(
        "compiled format %r: order=%s size=%d values=%d",
        fmt,
        schema.order().value,
        schema.size(),
        schema.value_count(),
    )
    return schema


def compile(fmt: str | CompiledSchema) -> CompiledSchema:
    """Compile a format string into a reusable schema.

    Compiled schemas are cached per format string, so calling this repeatedly
    with the same string is cheap.

    Args:
        fmt: Format string, or an already compiled schema (returned as is)

    Returns:
        CompiledSchema for the format

    Raises:
        FormatError: If the string does not match the format grammar
    """
    if isinstance(fmt, CompiledSchema):
        return fmt
    if not isinstance(fmt, str):
        # Unhashable or foreign objects must not reach the cache.
        return CompiledSchema(fmt)
    return _compile_cached(fmt)
