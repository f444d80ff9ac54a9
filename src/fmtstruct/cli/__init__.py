"""Command-line interface for fmtstruct."""
