"""
  Token type registry

Declaration order is precedence: when two token types match overlapping
characters, the one declared first keeps them and the later match is
discarded whole. This is what keeps digits inside strings out of the number
types, and `1.5` a single float rather than two ints.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Callable

from pexpr.types.symbol import Symbol


class TokenKind(enum.Enum):
    STRING = "string"
    WHITESPACE = "whitespace"
    OPEN_PAREN = "open_paren"
    CLOSE_PAREN = "close_paren"
    OPEN_BRACKET = "open_bracket"
    CLOSE_BRACKET = "close_bracket"
    FLOAT = "float"
    INT = "int"
    BOOLEAN = "boolean"
    IDENTIFIER = "identifier"

    @property
    def is_literal(self) -> bool:
        return self in LITERAL_KINDS

    def __str__(self) -> str:
        return self.value


# Kinds whose token directly carries a runtime value
LITERAL_KINDS = frozenset(
    {TokenKind.INT, TokenKind.FLOAT, TokenKind.STRING, TokenKind.BOOLEAN}
)


def _identity(text: str) -> Any:
    return text


def _int_or_float(text: str) -> int | float:
    """Cast an INT token; digit runs too long for int() become a float."""
    try:
        return int(text)
    except ValueError:
        return float(text)


@dataclass(frozen=True)
class TokenType:
    pattern: re.Pattern
    kind: TokenKind
    cast: Callable[[str], Any] = _identity

    def match(self, source: str) -> list[re.Match]:
        """All non-overlapping matches of this type over the whole source."""
        return list(self.pattern.finditer(source))


TOKEN_TYPES: tuple[TokenType, ...] = (
    TokenType(re.compile(r'"[^"]*"'), TokenKind.STRING, lambda s: s[1:-1]),
    TokenType(re.compile(r"\s+"), TokenKind.WHITESPACE),
    TokenType(re.compile(r"\("), TokenKind.OPEN_PAREN),
    TokenType(re.compile(r"\)"), TokenKind.CLOSE_PAREN),
    TokenType(re.compile(r"\["), TokenKind.OPEN_BRACKET),
    TokenType(re.compile(r"\]"), TokenKind.CLOSE_BRACKET),
    TokenType(re.compile(r"[0-9]+\.[0-9]*|[0-9]*\.[0-9]+"), TokenKind.FLOAT, float),
    TokenType(re.compile(r"[0-9]+"), TokenKind.INT, _int_or_float),
    TokenType(re.compile(r"true|false"), TokenKind.BOOLEAN, lambda s: s == "true"),
    TokenType(re.compile(r"[a-zA-Z]+"), TokenKind.IDENTIFIER, Symbol),
)
