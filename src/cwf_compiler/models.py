from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from cwf_compiler.errors import ModelError


class TypeTag(Enum):
    """The three primitive kinds a CWF field can hold."""

    INT = "int"
    DECIMAL = "decimal"
    STRING = "string"


@dataclass(frozen=True)
class Field:
    name: str
    type: TypeTag
    position: int
    width: int
    decimal_digits: int = 0

    @property
    def end(self) -> int:
        return self.position + self.width

    @property
    def unpack_slice(self) -> slice:
        """The [position, position + width) span of this field in a record."""
        return slice(self.position, self.end)

    def directive(self) -> str:
        """printf-style conversion directive that renders this field."""
        if self.type is TypeTag.INT:
            return f"%{self.width}d"
        if self.type is TypeTag.DECIMAL:
            return f"%{self.width}.{self.decimal_digits}f"
        return f"%{self.width}s"


@dataclass(frozen=True)
class Message:
    name: str
    fields: Tuple[Field, ...] = field(default_factory=tuple)

    @property
    def length(self) -> int:
        """Total record length: end of the last declared field."""
        if not self.fields:
            raise ModelError(f"message '{self.name}' declares no fields")
        return self.fields[-1].end

    def pack_format(self) -> str:
        """Composite printf format reproducing the fixed-width record."""
        return "".join(f.directive() for f in self.fields)


@dataclass(frozen=True)
class Operation:
    name: str
    input: Message
    output: Message


def check_field(f: Field) -> None:
    """Raise ModelError if a field's width cannot hold its declared type."""
    if f.width < 1:
        raise ModelError(f"field '{f.name}' must be at least 1 character wide, got {f.width}")
    if f.type is TypeTag.DECIMAL and not f.width > f.decimal_digits >= 0:
        raise ModelError(
            f"decimal field '{f.name}' needs a width greater than its "
            f"{f.decimal_digits} decimal digit(s), got {f.width}"
        )
