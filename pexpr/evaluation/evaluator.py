"""Single-pass parser/evaluator for pexpr.

Parsing and evaluation are fused: tokens are scanned once, left to right, by
a shift/reduce machine with two stacks. Function names are shifted onto
`pending_functions`, literals and results onto `pending_values`, and every
close-paren reduces the innermost open expression straight to a value. No
tree is built.

Because every argument is shifted before its closing paren is reached, all
arguments are evaluated before the builtin runs: `if` selects between two
already-computed values and a failing branch fails the whole pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from pexpr import Value
from pexpr.builtin.builtins import BUILTINS, Builtin
from pexpr.errors import (
    PexprError,
    PexprSyntaxError,
    PexprDefinitionError,
    PexprInvalidFunction,
    PexprArityError,
    PexprTypeError,
)
from pexpr.reader.lexer import Token
from pexpr.reader.token_types import TokenKind
from pexpr.types.environment import Environment
from pexpr.types.symbol import DEF
from pexpr.types.value import kind_of

logger = logging.getLogger(__name__)


@dataclass
class ParserState:
    """Transient machine state, one per evaluation pass."""
    depth: int = 0
    pending_functions: list[Token] = field(default_factory=list)
    pending_values: list[Value] = field(default_factory=list)
    expecting_function: bool = False
    building_array: bool = False
    array_buffer: list[Value] = field(default_factory=list)


def parse_and_evaluate(
    tokens: Sequence[Token],
    env: Optional[Environment] = None,
    builtins: Optional[Mapping[str, Builtin]] = None,
) -> Value:
    """
    Evaluate a token sequence to a single value.

    `env` receives the constants defined by `def` forms; a fresh one is used
    when omitted. When several top-level values are produced the last one
    is returned.
    """
    if env is None:
        env = Environment()
    if builtins is None:
        builtins = BUILTINS

    tokens = [t for t in tokens if t.kind is not TokenKind.WHITESPACE]
    state = ParserState()

    i = 0
    while i < len(tokens):
        token = tokens[i]
        match token.kind:
            case TokenKind.IDENTIFIER if state.expecting_function:
                state.expecting_function = False
                if token.value == DEF:
                    state.pending_values.append(_define(tokens, i, env))
                    # The definition consumes its own close-paren
                    state.depth -= 1
                    # Absorb def, key, literal and close-paren; _define checked all four exist
                    i += 4
                    continue
                state.pending_functions.append(token)

            case TokenKind.CLOSE_PAREN:
                if state.building_array:
                    raise PexprSyntaxError(
                        "Parsing error: trying to evaluate an expression in an array",
                        token.offset,
                    )
                state.depth -= 1
                if state.depth < 0:
                    raise PexprSyntaxError(
                        "Parsing error: too many close parenthesis", token.offset
                    )
                state.expecting_function = False
                _reduce(state, token, builtins)

            case TokenKind.IDENTIFIER:
                state.pending_values.append(env.lookup(token.value, token.offset))

            # A literal in function position is discarded and a name is still expected
            case TokenKind.INT | TokenKind.FLOAT | TokenKind.STRING | TokenKind.BOOLEAN if not state.expecting_function:
                if state.building_array:
                    state.array_buffer.append(token.value)
                else:
                    state.pending_values.append(token.value)

            case TokenKind.OPEN_BRACKET:
                if state.building_array:
                    raise PexprSyntaxError(
                        "Parsing error: trying to make an array within an array",
                        token.offset,
                    )
                state.building_array = True

            case TokenKind.CLOSE_BRACKET:
                if not state.building_array:
                    raise PexprSyntaxError(
                        "Parsing error: trying to close a non-existent array",
                        token.offset,
                    )
                state.pending_values.append(state.array_buffer)
                state.building_array = False
                state.array_buffer = []

            case TokenKind.OPEN_PAREN:
                if state.building_array:
                    raise PexprSyntaxError(
                        "Parsing error: trying to create an expression in an array",
                        token.offset,
                    )
                state.depth += 1
                state.expecting_function = True
        i += 1

    if state.depth != 0:
        raise PexprSyntaxError(
            f"Parsing error: parenthesis mismatch, depth:{state.depth}, expected:0"
        )
    if state.building_array:
        raise PexprSyntaxError("Parsing error: unterminated array")
    if not state.pending_values:
        raise PexprSyntaxError("Parsing error: nothing to evaluate")
    if len(state.pending_values) > 1:
        logger.debug("%d values left on the stack, returning the last", len(state.pending_values))
    return state.pending_values[-1]


def _define(tokens: Sequence[Token], i: int, env: Environment) -> Value:
    """Bind the constant of a `( def <identifier> <literal> )` form starting at `def` token i."""
    shape = tokens[i + 1:i + 4]
    if len(shape) < 3:
        raise PexprDefinitionError(
            "Parsing error: def expects (def <identifier> <literal>)", tokens[i].offset
        )
    key, literal, close = shape
    if key.kind is not TokenKind.IDENTIFIER:
        raise PexprDefinitionError(
            f"Parsing error: def expects an identifier to define, found {key.kind}",
            key.offset,
        )
    if not literal.kind.is_literal:
        raise PexprDefinitionError(
            f"Parsing error: def expects a literal value for {key.value}, found {literal.kind}",
            literal.offset,
        )
    if close.kind is not TokenKind.CLOSE_PAREN:
        raise PexprDefinitionError(
            f"Parsing error: def of {key.value} takes a single literal, found {close.kind}",
            close.offset,
        )
    env.define(key.value, literal.value)
    logger.debug("def %s = %r", key.value, literal.value)
    return literal.value


def _reduce(state: ParserState, close: Token, builtins: Mapping[str, Builtin]) -> None:
    """Apply the innermost pending function to its arguments and push the result."""
    if not state.pending_functions:
        raise PexprSyntaxError(
            "Parsing error: Cannot evaluate without a function", close.offset
        )
    head = state.pending_functions.pop()
    name = head.value
    builtin = builtins.get(name.id)
    # Constants only ever hold literals, so a bound name is never callable
    if builtin is None:
        raise PexprInvalidFunction(
            f"Evaluation error: {name} is not a valid function", head.offset
        )

    args: list[Value] = []
    values = state.pending_values
    for index in range(builtin.arity - 1, -1, -1):
        if not values:
            raise PexprArityError(
                f"Evaluation error: {name} expects {builtin.arity} arguments, but only got {len(args)}",
                head.offset,
            )
        expected = builtin.arg_kinds[index]
        if not expected.accepts(values[-1]):
            raise PexprTypeError(
                f"Evaluation error: {name} expects arg {index} to be a {expected} but it is a {kind_of(values[-1])}",
                head.offset,
            )
        args.append(values.pop())
    args.reverse()

    try:
        result = builtin(*args)
    except PexprError as e:
        if e.offset is None:
            e.offset = head.offset
        raise
    logger.debug("(%s %s) => %r", name, " ".join(repr(a) for a in args), result)
    values.append(result)
