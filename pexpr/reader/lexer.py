"""
  Tokenizer

- Every declared token type is matched over the full input independently.
- Overlaps between types are resolved by declaration order (see token_types).
- Characters no type claims are silently dropped; tokenize never fails.
- The result is sorted by source offset, ready for a left-to-right pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from pexpr.reader.token_types import TOKEN_TYPES, TokenKind, TokenType


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any
    offset: int

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, @{self.offset})"


def lex(source: str, token_types: Sequence[TokenType] = TOKEN_TYPES) -> Iterable[tuple[TokenType, int, str]]:
    """Yield (token_type, start, text) candidates that survive overlap resolution."""
    claimed = bytearray(len(source))
    for token_type in token_types:
        for m in token_type.match(source):
            start, end = m.span()
            if start == end:
                continue
            if any(claimed[start:end]):
                continue
            claimed[start:end] = b"\x01" * (end - start)
            yield token_type, start, m.group(0)


def tokenize(source: str, token_types: Sequence[TokenType] = TOKEN_TYPES) -> list[Token]:
    """Convert source text into an offset-ordered list of typed tokens."""
    candidates = sorted(lex(source, token_types), key=lambda c: c[1])
    return [
        Token(token_type.kind, token_type.cast(text), start)
        for token_type, start, text in candidates
    ]
