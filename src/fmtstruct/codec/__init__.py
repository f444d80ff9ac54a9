"""Format-string codec for fmtstruct.

This module provides the format compiler and the pack/unpack engines that
translate between byte buffers and sequences of typed values.
"""

from __future__ import annotations

from .config import StreamConfig
from .decoder import decode, unpack, unpack_from
from .encoder import encode, pack, pack_into
from .grammar import FieldGroup, parse_format
from .registry import ByteOrder, FieldType, ValueKind, find_field_type
from .schema import CompiledSchema, compile
from .stream import UnpackStream, iter_unpack

__all__ = [
    "compile",
    "parse_format",
    "pack",
    "pack_into",
    "unpack",
    "unpack_from",
    "iter_unpack",
    "encode",
    "decode",
    "CompiledSchema",
    "FieldGroup",
    "FieldType",
    "ByteOrder",
    "ValueKind",
    "find_field_type",
    "UnpackStream",
    "StreamConfig",
]
