"""Named-record base class.

This module provides StructMessage, a Pydantic model whose fields map, in
declaration order, onto the logical values of a format string.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from ..codec.schema import CompiledSchema, compile
from ..exceptions import SchemaError


class StructMessage(BaseModel):
    """Base class for records packed with a format string.

    Subclasses declare ``struct_format`` as a ClassVar and one model field per
    logical value of that format. String groups (``"10s"``) map to a single
    ``bytes`` field; scalar groups with a repeat count (``"3h"``) map to that
    many fields.

    Example:
        >>> from typing import ClassVar
        >>> from pydantic import Field
        >>> class Header(StructMessage):
        ...     struct_format: ClassVar[str] = ">4sHH"
        ...
        ...     magic: bytes
        ...     version: int = Field(ge=0, le=65535)
        ...     flags: int = 0

    Attributes:
        struct_format: Format string describing the binary layout
    """

    model_config = ConfigDict(
        # Lax validation so decoded values coerce into annotated types
        strict=False,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    struct_format: ClassVar[str | None] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        """Check the field layout against struct_format once the model is built."""
        super().__pydantic_init_subclass__(**kwargs)

        schema = cls.struct_schema()
        if schema is None:
            return

        field_count = len(cls.model_fields)
        if field_count != schema.value_count():
            raise SchemaError(
                f"{cls.__name__}: struct_format {schema.format!r} has "
                f"{schema.value_count()} values but the model declares {field_count} fields"
            )

    @classmethod
    def struct_schema(cls) -> CompiledSchema | None:
        """Return the compiled struct_format, or None if the class has none.

        Raises:
            FormatError: If struct_format is malformed
        """
        if cls.struct_format is None:
            return None
        return compile(cls.struct_format)
