"""Constant environment for pexpr.

The Environment stores bindings of Symbols to literal values created by
`(def <identifier> <literal>)` forms. One evaluation pass owns one
Environment unless a host deliberately hands the same instance to several
passes (see `pexpr.interpreter.Interpreter`).
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from pexpr import Value
from pexpr.errors import PexprUndefinedConstant
from pexpr.types.symbol import Symbol


class Environment:
    """Flat mapping from Symbols to previously defined values."""

    __slots__ = ("vars",)

    def __init__(self, initial: Optional[dict[Symbol, Value]] = None):
        self.vars: dict[Symbol, Value] = {}
        if initial:
            self.update(initial)

    def define(self, name: Symbol, value: Value) -> None:
        """Bind `name` to `value`, replacing any earlier binding.

        Raises TypeError if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise TypeError(f"Cannot define {name!r} as a constant name")
        self.vars[name] = value

    def lookup(self, name: Symbol, offset: Optional[int] = None) -> Value:
        """Return the value bound to `name`.

        Raises PexprUndefinedConstant if nothing is bound.
        """
        try:
            return self.vars[name]
        except KeyError:
            raise PexprUndefinedConstant(
                f"Evaluation error: undefined constant {name}", offset
            ) from None

    def update(self, mapping: dict[Symbol, Value]) -> None:
        """Bulk-define a mapping of Symbol -> value."""
        for k, v in mapping.items():
            self.define(k, v)

    def clear(self) -> None:
        self.vars.clear()

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write the bindings into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment ")
            self._write_vars(buffer)
            buffer.write(">")
            return buffer.getvalue()
