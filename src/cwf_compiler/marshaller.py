"""Reference marshaller for CWF records.

Mirrors what the generated DataHandler does on the wire so that message
layouts can be checked from Python.
"""

from __future__ import annotations

from typing import Dict, Sequence, Union

from cwf_compiler.errors import MarshalError
from cwf_compiler.models import Field, Message, TypeTag

Value = Union[int, float, str]


def unpack_decimal(record: str, position: int, width: int, digits: int) -> str:
    """Slice a decimal field and insert the point ``digits`` from the right."""
    split = position + width - digits
    return record[position:split] + "." + record[split:position + width]


def unpack_field(f: Field, record: str) -> str:
    if f.type is TypeTag.DECIMAL:
        return unpack_decimal(record, f.position, f.width, f.decimal_digits)
    return record[f.unpack_slice]


def unpack(message: Message, record: str) -> Dict[str, str]:
    """Split a fixed-width record into its fields, in declaration order."""
    if len(record) < message.length:
        raise MarshalError(
            f"message too short length={len(record)}, "
            f"'{message.name}' needs {message.length}"
        )
    return {f.name: unpack_field(f, record) for f in message.fields}


def _check_value(message: Message, f: Field, value: Value) -> None:
    """Reject values the generated handler's String.format would refuse."""
    if f.type is TypeTag.STRING:
        return
    allowed = (int,) if f.type is TypeTag.INT else (int, float)
    if isinstance(value, bool) or not isinstance(value, allowed):
        raise MarshalError(
            f"cannot pack '{message.name}': field '{f.name}' is {f.type.value}, "
            f"got {type(value).__name__} {value!r}"
        )


def pack(message: Message, values: Sequence[Value]) -> str:
    """Render field values as one fixed-width record."""
    if len(values) != len(message.fields):
        raise MarshalError(
            f"'{message.name}' has {len(message.fields)} field(s), got {len(values)} value(s)"
        )
    for f, value in zip(message.fields, values):
        _check_value(message, f, value)
    try:
        record = message.pack_format() % tuple(values)
    except (TypeError, ValueError) as e:
        raise MarshalError(f"cannot pack '{message.name}': {e}") from e
    if len(record) != message.length:
        raise MarshalError(
            f"packed '{message.name}' is {len(record)} characters, expected {message.length}"
        )
    return record


def sample_record(message: Message) -> str:
    """Build a record where every field counts 0123456789... from its start."""
    return "".join(
        "".join(str(i % 10) for i in range(f.width))
        for f in message.fields
    )
