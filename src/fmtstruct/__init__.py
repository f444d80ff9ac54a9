"""fmtstruct: Format-String Binary Struct Codec

A Python library for converting between raw byte buffers and sequences of
typed values, driven by compact format strings such as ``"<3sf"``: an optional
byte-order marker followed by repeat counts and one-character type tags.

Key Features:
- Format strings compiled once into immutable, cached schemas
- Strict pack/unpack with exact buffer sizes and typed errors
- Streaming unpack with backpressure on a background thread
- Pydantic-based named records mapped onto a format

Quick Start:
    >>> from fmtstruct import pack, unpack, size_of
    >>>
    >>> data = pack("<3sf", b"abc", 1.01)
    >>> len(data) == size_of("<3sf")
    True
    >>> unpack("<3sf", data)
    (b'abc', 1.0099999904632568)

Named records:
    >>> from typing import ClassVar
    >>> from fmtstruct import StructMessage, encode, decode
    >>>
    >>> class Header(StructMessage):
    ...     struct_format: ClassVar[str] = ">4sHH"
    ...     magic: bytes
    ...     version: int
    ...     flags: int
    >>>
    >>> decode(Header, encode(Header(magic=b"GRIM", version=3, flags=0))).version
    3
"""

from __future__ import annotations

import logging

from .codec import (
    ByteOrder,
    CompiledSchema,
    FieldGroup,
    FieldType,
    StreamConfig,
    UnpackStream,
    ValueKind,
    compile,
    decode,
    encode,
    iter_unpack,
    pack,
    pack_into,
    unpack,
    unpack_from,
)
from .exceptions import (
    ArityError,
    FormatError,
    OffsetRangeError,
    PackError,
    SchemaError,
    SizeMismatchError,
    StreamStalledError,
    StructCodecError,
    TruncatedInputError,
    TypeMismatchError,
    UnpackError,
)
from .models import StructMessage
from .utils import group_sizes, size_of, value_count_of

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core API
    "compile",
    "pack",
    "pack_into",
    "unpack",
    "unpack_from",
    "iter_unpack",
    # Schema types
    "CompiledSchema",
    "FieldGroup",
    "FieldType",
    "ByteOrder",
    "ValueKind",
    # Streaming
    "UnpackStream",
    "StreamConfig",
    # Named records
    "StructMessage",
    "encode",
    "decode",
    # Sizing
    "size_of",
    "value_count_of",
    "group_sizes",
    # Exceptions
    "StructCodecError",
    "FormatError",
    "SchemaError",
    "PackError",
    "ArityError",
    "TypeMismatchError",
    "UnpackError",
    "SizeMismatchError",
    "TruncatedInputError",
    "StreamStalledError",
    "OffsetRangeError",
    # Version
    "__version__",
]
