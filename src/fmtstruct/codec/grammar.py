"""Format string parser.

Turns a format string such as ``"<3sf"`` into its resolved byte order and an
ordered tuple of FieldGroup (repeat count + field type).

Grammar:
    format := order? group+
    order  := '<' | '>' | '!' | '=' | '@'
    group  := digits? type_tag
"""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import FormatError
from .registry import DEFAULT_ORDER, ORDER_MARKERS, ByteOrder, FieldType, find_field_type

_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class FieldGroup:
    """One parsed unit of a format string.

    Attributes:
        count: Repeat count (always >= 1)
        field_type: Type of every value in the group
    """

    count: int
    field_type: FieldType

    def byte_size(self) -> int:
        """Number of bytes this group occupies in an encoded buffer."""
        return self.count * self.field_type.width

    def value_count(self) -> int:
        """Number of logical values this group packs or unpacks.

        A string group is a single value made of ``count`` bytes; any other
        group is ``count`` independent values.
        """
        if self.field_type.is_string:
            return 1
        return self.count

    def __str__(self) -> str:
        if self.count == 1:
            return self.field_type.tag
        return f"{self.count}{self.field_type.tag}"


def parse_format(fmt: str) -> tuple[ByteOrder, tuple[FieldGroup, ...]]:
    """Parse a format string into a byte order and field groups.

    Args:
        fmt: Format string (e.g. ``"<10s2bd"``)

    Returns:
        Tuple of (resolved byte order, field groups in declaration order)

    Raises:
        FormatError: If the string does not match the format grammar

    Example:
        >>> order, groups = parse_format(">2h?")
        >>> order
        <ByteOrder.BIG: 'big'>
        >>> [str(g) for g in groups]
        ['2h', '?']
    """
    if not isinstance(fmt, str):
        raise FormatError(f"format must be a str, got {type(fmt).__name__}")
    if not fmt:
        raise FormatError("empty struct format")

    order = DEFAULT_ORDER
    start = 0
    if fmt[0] in ORDER_MARKERS:
        resolved = ORDER_MARKERS[fmt[0]]
        order = resolved if resolved is not None else ByteOrder.native()
        start = 1

    groups: list[FieldGroup] = []
    pending = ""
    pending_start = start

    for position in range(start, len(fmt)):
        char = fmt[position]

        if char in _DIGITS:
            if not pending:
                pending_start = position
            pending += char
            continue

        if char.isspace():
            if pending:
                raise FormatError(
                    f"repeat count {pending!r} at position {pending_start} must be "
                    f"followed directly by a type character",
                    position,
                )
            continue

        if char in ORDER_MARKERS:
            raise FormatError(
                f"byte order marker {char!r} at position {position} is only allowed "
                f"as the first character",
                position,
            )

        field_type = find_field_type(char)
        if field_type is None:
            raise FormatError(
                f"bad char {char!r} in struct format at position {position}", position
            )

        try:
            count = int(pending) if pending else 1
        except ValueError as e:
            raise FormatError(
                f"repeat count at position {pending_start} is too large ({len(pending)} digits)",
                pending_start,
            ) from e
        if count < 1:
            raise FormatError(
                f"repeat count at position {pending_start} must be positive, got {count}",
                pending_start,
            )
        groups.append(FieldGroup(count, field_type))
        pending = ""

    if pending:
        raise FormatError(
            f"repeat count {pending!r} at position {pending_start} has no type character",
            pending_start,
        )

    if not groups:
        raise FormatError(f"struct format {fmt!r} contains no fields")

    return order, tuple(groups)
