"""Byte-level writing and reading cursors.

This module provides the buffers the pack and unpack engines walk while
encoding or decoding field groups.
"""

from __future__ import annotations

from ..exceptions import TruncatedInputError

BytesLike = bytes | bytearray | memoryview


class ByteWriter:
    """Accumulates encoded fields into a byte buffer.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write_bytes(b"abc")
        >>> writer.write_bytes(b"\\x01")
        >>> writer.to_bytes()
        b'abc\\x01'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def write_bytes(self, data: BytesLike) -> None:
        """Append raw bytes.

        Args:
            data: Bytes to append
        """
        self._buffer += data

    def byte_length(self) -> int:
        """Return the number of bytes written so far."""
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return the written bytes as an immutable bytes object."""
        return bytes(self._buffer)


class ByteReader:
    """Reads fixed-width chunks from a byte buffer.

    Example:
        >>> reader = ByteReader(b"abcdefg")
        >>> bytes(reader.read_bytes(3))
        b'abc'
        >>> reader.bytes_remaining()
        4
    """

    def __init__(self, data: BytesLike) -> None:
        """Initialize a reader over the given data.

        Args:
            data: Byte buffer to read; it is not copied
        """
        self._view = memoryview(data).cast("B")
        self._position = 0

    def read_bytes(self, num_bytes: int) -> memoryview:
        """Read the next ``num_bytes`` bytes.

        Args:
            num_bytes: Number of bytes to read

        Returns:
            A view over the bytes read

        Raises:
            TruncatedInputError: If fewer than ``num_bytes`` bytes remain
        """
        available = len(self._view) - self._position
        if num_bytes > available:
            raise TruncatedInputError(num_bytes, available, self._position)

        chunk = self._view[self._position : self._position + num_bytes]
        self._position += num_bytes
        return chunk

    def bytes_remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._view) - self._position

    def position(self) -> int:
        """Return the current read position in bytes."""
        return self._position
