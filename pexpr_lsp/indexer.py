from __future__ import annotations

"""
Static indexer for pexpr documents, used by the language server.

The buffer is never evaluated. It is tokenized with the real tokenizer and
scanned once to collect:
- constants bound by (def <identifier> <literal>) forms, with positions
- function-position identifiers that are not builtins
- value-position identifiers used before any def binds them
- parenthesis/bracket balance and an unterminated string quote
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from pexpr.builtin.builtins import BUILTINS
from pexpr.reader.lexer import tokenize
from pexpr.reader.token_types import TokenKind
from pexpr.types.symbol import DEF


@dataclass
class SymbolDef:
    name: str
    kind: str  # value kind of the bound literal
    line: int
    col: int


@dataclass
class Problem:
    message: str
    line: int
    col: int
    length: int = 1


@dataclass
class DocumentIndex:
    constants: Dict[str, SymbolDef] = field(default_factory=dict)
    unknown_functions: List[Problem] = field(default_factory=list)
    undefined_constants: List[Problem] = field(default_factory=list)
    structure: List[Problem] = field(default_factory=list)
    ignored_values: List[Problem] = field(default_factory=list)
    paren_balance: int = 0
    bracket_balance: int = 0
    has_unmatched_quote: bool = False


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = [t for t in tokenize(text) if t.kind is not TokenKind.WHITESPACE]
    defined: set[str] = set()

    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok.kind is TokenKind.OPEN_PAREN:
            idx.paren_balance += 1
            j = i + 1
            # The evaluator drops literals that sit where a function name belongs
            while j < len(tokens) and tokens[j].kind.is_literal:
                line, col = _position_from_offset(text, tokens[j].offset)
                idx.ignored_values.append(
                    Problem("Value in function position is ignored", line, col)
                )
                j += 1
            head = tokens[j] if j < len(tokens) else None
            if head is not None and head.kind is TokenKind.IDENTIFIER:
                if head.value == DEF:
                    i = _index_definition(text, tokens, j, idx, defined)
                    continue
                name = str(head.value)
                if name not in BUILTINS:
                    line, col = _position_from_offset(text, head.offset)
                    idx.unknown_functions.append(
                        Problem(f"Unknown function '{name}'", line, col, len(name))
                    )
                i = j + 1
                continue
            i = j
            continue
        elif tok.kind is TokenKind.CLOSE_PAREN:
            idx.paren_balance -= 1
            if idx.paren_balance < 0:
                line, col = _position_from_offset(text, tok.offset)
                idx.structure.append(Problem("Too many close parenthesis", line, col))
                idx.paren_balance = 0
        elif tok.kind is TokenKind.OPEN_BRACKET:
            idx.bracket_balance += 1
            if idx.bracket_balance > 1:
                line, col = _position_from_offset(text, tok.offset)
                idx.structure.append(Problem("Arrays cannot be nested", line, col))
        elif tok.kind is TokenKind.CLOSE_BRACKET:
            idx.bracket_balance -= 1
            if idx.bracket_balance < 0:
                line, col = _position_from_offset(text, tok.offset)
                idx.structure.append(Problem("Closing an array that was never opened", line, col))
                idx.bracket_balance = 0
        elif tok.kind is TokenKind.IDENTIFIER:
            name = str(tok.value)
            if name not in defined:
                line, col = _position_from_offset(text, tok.offset)
                idx.undefined_constants.append(
                    Problem(f"Undefined constant '{name}'", line, col, len(name))
                )
        i += 1

    # Strings cannot contain quotes, so an odd count means one is unterminated
    idx.has_unmatched_quote = text.count('"') % 2 == 1
    return idx


def _index_definition(text, tokens, i, idx: DocumentIndex, defined: set[str]) -> int:
    """Record the def form whose `def` token is at i; return the index to resume at."""
    shape = tokens[i + 1:i + 4]
    line, col = _position_from_offset(text, tokens[i].offset)
    if (
        len(shape) < 3
        or shape[0].kind is not TokenKind.IDENTIFIER
        or not shape[1].kind.is_literal
        or shape[2].kind is not TokenKind.CLOSE_PAREN
    ):
        idx.structure.append(
            Problem("def expects (def <identifier> <literal>)", line, col, len("def"))
        )
        return i + 1
    key, literal, _ = shape
    name = str(key.value)
    kline, kcol = _position_from_offset(text, key.offset)
    idx.constants[name] = SymbolDef(name=name, kind=str(literal.kind), line=kline, col=kcol)
    defined.add(name)
    # The close-paren of the form balances its open-paren
    idx.paren_balance -= 1
    return i + 4


# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    name: f"{b.signature}: {b.doc}" if b.doc else b.signature
    for name, b in BUILTINS.items()
}
BUILTIN_SIGNATURES["def"] = "(def identifier literal): Define a constant"
