"""Runtime value kinds.

Values are plain Python objects; `ValueKind` is the closed tag set the
evaluator checks builtin arguments against. `bool` is a subclass of `int` in
Python, so every check here tests for bool first.
"""

from __future__ import annotations

import enum
import json

from pexpr import Value


class ValueKind(enum.Enum):
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"

    def __str__(self) -> str:
        return self.value


def kind_of(value: Value) -> ValueKind:
    """Return the runtime kind of `value`; raises TypeError for foreign objects."""
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.ARRAY
    raise TypeError(f"{value!r} is not a pexpr value")


def is_number(value: Value) -> bool:
    return kind_of(value) in (ValueKind.INT, ValueKind.FLOAT)


def to_text(value: Value) -> str:
    """Canonical textual form used by the `string` builtin.

    Arrays are comma-joined without brackets or quotes, booleans are
    lowercase, numbers use Python's own conversion.
    """
    kind = kind_of(value)
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.ARRAY:
        return ",".join(to_text(x) for x in value)
    return str(value)


def _canonical(value: Value) -> Value:
    # Integral floats render as ints so [1] and [1.] serialize alike
    if isinstance(value, list):
        return [_canonical(x) for x in value]
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def serialize(value: Value) -> str:
    """Canonical serialization used for structural array equality."""
    return json.dumps(_canonical(value), separators=(",", ":"))
