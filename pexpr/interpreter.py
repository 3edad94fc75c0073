from __future__ import annotations

import logging
from typing import Mapping, Optional

from pexpr import Value
from pexpr.builtin.builtins import BUILTINS, Builtin
from pexpr.evaluation.evaluator import parse_and_evaluate
from pexpr.reader.lexer import tokenize
from pexpr.types.environment import Environment

logger = logging.getLogger(__name__)


def evaluate(source: str, env: Optional[Environment] = None) -> Value:
    """Tokenize and evaluate `source`, returning its value or raising a PexprError."""
    return parse_and_evaluate(tokenize(source), env)


class Interpreter:
    """
    Evaluates pexpr source for an interactive host.
    With `persist_env` the constants defined by one call stay visible to the next.
    """
    def __init__(
        self,
        persist_env: bool = True,
        builtins: Optional[Mapping[str, Builtin]] = None,
    ):
        self.persist_env = persist_env
        self.builtins = BUILTINS if builtins is None else builtins
        self.env = Environment()

    def eval(self, code: str) -> Value:
        """Evaluate one input; a fresh parser state is used every time."""
        env = self.env if self.persist_env else Environment()
        # Definitions made before a failure stay bound in a persistent env
        result = parse_and_evaluate(tokenize(code), env, self.builtins)
        logger.debug("%r => %r", code, result)
        return result

    def reset(self) -> None:
        """Forget every constant defined so far."""
        self.env.clear()
