"""Main CLI entry point for fmtstruct."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .. import __version__
from ..codec.decoder import unpack
from ..codec.encoder import pack
from ..codec.schema import compile
from ..exceptions import StructCodecError
from .describe import coerce_values, describe_schema, format_value


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the fmtstruct CLI.

    Args:
        argv: Argument list (defaults to ``sys.argv[1:]``)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="fmtstruct: Format-String Binary Struct Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fmtstruct --describe "<10s2bd"          Show per-group size breakdown
  fmtstruct --size "<3sf"                 Show encoded size in bytes
  fmtstruct --unpack "<3sf" 616263ae47813f
  fmtstruct --pack "<3sf" abc 1.01
  fmtstruct --version                     Show version
        """,
    )

    parser.add_argument(
        "--describe",
        metavar="FORMAT",
        type=str,
        help="Show the field groups, offsets and sizes of a format",
    )

    parser.add_argument(
        "--size",
        metavar="FORMAT",
        type=str,
        help="Print the encoded size of a format in bytes",
    )

    parser.add_argument(
        "--unpack",
        nargs=2,
        metavar=("FORMAT", "HEX"),
        help="Unpack a hex-encoded buffer and print one value per line",
    )

    parser.add_argument(
        "--pack",
        nargs="+",
        metavar="FORMAT VALUE",
        help="Pack values with a format and print the result as hex",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"fmtstruct {__version__}",
    )

    args = parser.parse_args(argv)

    try:
        if args.describe is not None:
            describe_schema(compile(args.describe))
            return 0

        if args.size is not None:
            print(compile(args.size).size())
            return 0

        if args.unpack:
            fmt, hex_data = args.unpack
            try:
                data = bytes.fromhex(hex_data)
            except ValueError as e:
                print(f"Error: invalid hex data: {e}", file=sys.stderr)
                return 1
            for value in unpack(fmt, data):
                print(format_value(value))
            return 0

        if args.pack:
            schema = compile(args.pack[0])
            values = coerce_values(schema, args.pack[1:])
            print(pack(schema, *values).hex())
            return 0
    except StructCodecError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
