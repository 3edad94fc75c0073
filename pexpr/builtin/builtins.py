"""Builtin operations for the pexpr evaluator.

Each builtin is described by a fixed-arity signature of argument kinds and a
plain Python function receiving the already-checked arguments in source
order. The registry is read-only after import; callers may build their own
with `make_registry`.
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from pexpr import Value, BuiltinFn
from pexpr.errors import PexprCastError, PexprDomainError
from pexpr.types.value import ValueKind, kind_of, is_number, to_text, serialize


class ArgKind(enum.Enum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    ANYTHING = "anything"

    def accepts(self, value: Value) -> bool:
        """True if a value of this runtime kind may fill the argument slot."""
        if self is ArgKind.ANYTHING:
            return True
        if self is ArgKind.NUMBER:
            return is_number(value)
        kind = kind_of(value)
        if self is ArgKind.STRING:
            return kind is ValueKind.STRING
        return kind is ValueKind.BOOLEAN

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Builtin:
    name: str
    arg_kinds: tuple[ArgKind, ...]
    func: BuiltinFn
    doc: str = ""

    @property
    def arity(self) -> int:
        return len(self.arg_kinds)

    @property
    def signature(self) -> str:
        """Human-readable signature, e.g. `(plus number number)`."""
        return "(" + " ".join([self.name, *(str(k) for k in self.arg_kinds)]) + ")"

    def __call__(self, *args: Value) -> Value:
        return self.func(*args)


# Leading-number prefixes: trailing garbage after the number is ignored
_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)


# -------------------------------
# Arithmetic
# -------------------------------
def plus(a: Value, b: Value) -> Value:
    """Numeric sum; int + int stays int, any float operand gives float."""
    return a + b


def minus(a: Value, b: Value) -> Value:
    """Numeric difference."""
    return a - b


# -------------------------------
# Strings and conversion
# -------------------------------
def concat(a: str, b: str) -> str:
    return a + b


def to_int(text: str) -> int:
    """Parse the leading integer of `text`."""
    m = _INT_PREFIX.match(text)
    if m is None:
        raise PexprCastError(f'"{text}" cannot be cast to an integer.')
    try:
        return int(m.group(1))
    except ValueError:
        # int() refuses digit strings past sys.get_int_max_str_digits()
        raise PexprCastError(f'"{text}" cannot be cast to an integer.') from None


def to_float(text: str) -> float:
    """Parse the leading float of `text`."""
    m = _FLOAT_PREFIX.match(text)
    if m is None:
        raise PexprCastError(f'"{text}" cannot be cast to a float.')
    return float(m.group(1).replace("Infinity", "inf"))


def to_string(value: Value) -> str:
    return to_text(value)


def length(value: Value) -> int:
    """Number of characters in a string or elements in an array."""
    if kind_of(value) not in (ValueKind.STRING, ValueKind.ARRAY):
        raise PexprDomainError(
            f"Cannot get length of {to_text(value)} as it is neither a string nor array."
        )
    return len(value)


# -------------------------------
# Comparison and choice
# -------------------------------
def is_equal(a: Value, b: Value) -> bool:
    """Structural equality for arrays, numeric equality across int/float, otherwise same kind and equal."""
    ka, kb = kind_of(a), kind_of(b)
    if ka is ValueKind.ARRAY and kb is ValueKind.ARRAY:
        return serialize(a) == serialize(b)
    numbers = (ValueKind.INT, ValueKind.FLOAT)
    if ka in numbers and kb in numbers:
        return a == b
    return ka is kb and a == b


def if_(condition: bool, then: Value, otherwise: Value) -> Value:
    """Select an already-evaluated branch."""
    return then if condition else otherwise


N, S, B, A = ArgKind.NUMBER, ArgKind.STRING, ArgKind.BOOLEAN, ArgKind.ANYTHING

DEFAULT_BUILTINS: tuple[Builtin, ...] = (
    Builtin("plus", (N, N), plus, "Add two numbers"),
    Builtin("minus", (N, N), minus, "Subtract the second number from the first"),
    Builtin("concat", (S, S), concat, "Concatenate two strings"),
    Builtin("int", (S,), to_int, "Cast a string to an integer"),
    Builtin("float", (S,), to_float, "Cast a string to a float"),
    Builtin("string", (A,), to_string, "Cast any value to a string"),
    Builtin("length", (A,), length, "Length of a string or array"),
    Builtin("equals", (A, A), is_equal, "Check two values for equality"),
    Builtin("if", (B, A, A), if_, "First value if the condition holds, else the second"),
)


def make_registry(builtins: Iterable[Builtin]) -> Mapping[str, Builtin]:
    """Build a read-only name -> Builtin mapping; later entries replace earlier ones."""
    return MappingProxyType({b.name: b for b in builtins})


BUILTINS: Mapping[str, Builtin] = make_registry(DEFAULT_BUILTINS)
