"""Format description and value coercion for the CLI."""

from __future__ import annotations

from typing import Any, Sequence

from ..codec.registry import FieldType, ValueKind
from ..codec.schema import CompiledSchema
from ..exceptions import ArityError

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})

_LINE_WIDTH = 54


def describe_schema(schema: CompiledSchema) -> None:
    """Print a detailed size breakdown of a compiled format.

    Args:
        schema: Compiled schema to describe
    """
    title = schema.format
    print(f"{'=' * 19} {title} {'=' * 19}")
    print(f"Byte order: {schema.order().value}")
    print(f"Size: {schema.size()} bytes / {schema.size() * 8} bits")
    print(f"Values: {schema.value_count()}")
    print()

    print(f"{'-' * 27} Groups {'-' * 27}")
    offset = 0
    for i, group in enumerate(schema.groups(), 1):
        size = group.byte_size()
        field_type = group.field_type
        desc = f"{i}. {group} ({field_type.display_name})"
        info = f"@{offset}"
        dots_needed = _LINE_WIDTH - len(desc) - len(info) - len(str(size)) - len(" bytes") - 1
        print(f"{desc}{'.' * max(1, dots_needed)}{info} {size} bytes")
        offset += size

    print()


def coerce_text(field_type: FieldType, text: str) -> Any:
    """Convert one command-line argument into a value for a field type.

    Integers accept any base prefix Python accepts (``0x10``, ``0b101``).
    Strings and chars are taken as UTF-8 text.

    Args:
        field_type: Field the value is destined for
        text: Raw argument text

    Returns:
        Value suitable for pack()

    Raises:
        ValueError: If the text cannot be read as the field's kind
    """
    kind = field_type.kind
    if kind is ValueKind.INT:
        return int(text, 0)
    if kind is ValueKind.FLOAT:
        return float(text)
    if kind is ValueKind.BOOL:
        word = text.lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"invalid bool value: {text!r}")
    return text.encode("utf-8")


def coerce_values(schema: CompiledSchema, texts: Sequence[str]) -> list[Any]:
    """Convert command-line arguments into pack() values for a schema.

    Args:
        schema: Compiled schema the values will be packed with
        texts: One argument per logical value

    Returns:
        Values in format order

    Raises:
        ArityError: If the number of arguments does not match the format
        ValueError: If an argument cannot be read as its field's kind
    """
    if len(texts) != schema.value_count():
        raise ArityError(schema.value_count(), len(texts))

    values: list[Any] = []
    remaining = iter(texts)
    for group in schema.groups():
        for _ in range(group.value_count()):
            values.append(coerce_text(group.field_type, next(remaining)))
    return values


def format_value(value: Any) -> str:
    """Render a decoded value for display."""
    if isinstance(value, bytes):
        return repr(value)
    return str(value)
