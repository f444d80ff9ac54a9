#!/usr/bin/env python3
"""Basic usage example for fmtstruct.

This example demonstrates:
1. Packing values with a format string
2. Unpacking them back, and what byte order changes
3. Streaming values out of a buffer
4. Mapping a format onto a Pydantic model
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from fmtstruct import (
    StructCodecError,
    StructMessage,
    compile,
    decode,
    encode,
    group_sizes,
    iter_unpack,
    pack,
    unpack,
)


# Define a record layout
class StatusReport(StructMessage):
    """Vehicle status report as a fixed 8-byte big-endian record."""

    struct_format: ClassVar[str] = ">BHB?h?"

    vehicle_id: int = Field(ge=0, le=255, description="Vehicle ID (0-255)")
    depth_cm: int = Field(ge=0, le=10000, description="Depth in centimeters (0-100m)")
    battery_pct: int = Field(ge=0, le=100, description="Battery percentage (0-100)")
    active: bool = Field(description="Vehicle active flag")
    heading_delta: int = Field(ge=-180, le=180, description="Heading change in degrees")
    emergency: bool = False


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("fmtstruct Basic Usage Example")
    print("=" * 60)
    print()

    # Pack and unpack
    print("1. Packing b'abc' and 1.01 with '<3sf'...")
    data = pack("<3sf", b"abc", 1.01)
    print(f"   Hex: {data.hex()}")
    print(f"   Unpacked: {unpack('<3sf', data)}")
    print()

    # Byte order
    print("2. Byte order changes the bytes, not the values...")
    for fmt in ("<hI", ">hI"):
        encoded = pack(fmt, -2, 70000)
        print(f"   {fmt}: {encoded.hex()} -> {unpack(fmt, encoded)}")
    print()

    # Layout analysis
    print("3. Analyzing the layout of '<10s2bd'...")
    schema = compile("<10s2bd")
    for token, size in group_sizes(schema):
        print(f"   {token}: {size} bytes")
    print(f"   Total: {schema.size()} bytes, {schema.value_count()} values")
    print()

    # Streaming
    print("4. Streaming values from a buffer...")
    buffer = schema.pack(b"0123456789", -3, 7, 2.5)
    with schema.iter_unpack(buffer) as stream:
        for value in stream:
            print(f"   {value!r}")

    truncated = schema.iter_unpack(buffer[:12])
    print(f"   From 12 bytes: {list(truncated)} then {type(truncated.error).__name__}")
    print()

    # Named records
    print("5. Encoding a StatusReport record...")
    msg = StatusReport(
        vehicle_id=42, depth_cm=2500, battery_pct=87, active=True, heading_delta=-15
    )
    encoded_data = encode(msg)
    print(f"   Encoded size: {len(encoded_data)} bytes")
    print(f"   Hex: {encoded_data.hex()}")

    decoded_msg = decode(StatusReport, encoded_data)
    if decoded_msg == msg:
        print("   Round-trip successful")
    else:
        print("   Round-trip FAILED")
    print()

    # Errors
    print("6. Error handling...")
    for bad in ("3k", "3<s", ""):
        try:
            compile(bad)
        except StructCodecError as e:
            print(f"   {bad!r}: {type(e).__name__}: {e}")

    try:
        unpack("<3sf", b"abc")
    except StructCodecError as e:
        print(f"   short buffer: {type(e).__name__}: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
