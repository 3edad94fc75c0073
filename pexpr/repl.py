"""
Console read-eval-print loop for pexpr.

Each line is evaluated with a fresh parser state. Constants defined with
`def` stay bound between lines unless PEXPR_PERSIST_ENV is off.

Commands:
- :reset  forget all constants
- :quit   leave the loop (EOF works too)
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from pexpr import config
from pexpr.debug_utils.pprint import format_value, format_error
from pexpr.errors import PexprError
from pexpr.interpreter import Interpreter

logger = logging.getLogger(__name__)

RESET_CMD = ":reset"
QUIT_CMD = ":quit"


class Repl:
    def __init__(
        self,
        interp: Interpreter | None = None,
        prompt: str | None = None,
        color: bool = False,
    ):
        self.interp = interp if interp is not None else Interpreter(config.get_persist_env())
        self.prompt = config.get_prompt() if prompt is None else prompt
        self.color = color

    def process(self, line: str) -> str | None:
        """Evaluate one input line and return the text to display (None for blank lines)."""
        code = line.strip()
        if not code:
            return None
        if code == RESET_CMD:
            self.interp.reset()
            return "constants cleared"
        try:
            return format_value(self.interp.eval(code), self.color)
        except PexprError as e:
            logger.debug("evaluation failed: %s", e.message)
            return format_error(e, self.color)

    def run(self, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
        while True:
            stdout.write(f"{self.prompt} ")
            stdout.flush()
            line = stdin.readline()
            if not line or line.strip() == QUIT_CMD:
                break
            out = self.process(line)
            if out is not None:
                stdout.write(out + "\n")


def main() -> None:
    config.configure_logging()
    color = config.get_color() and sys.stdout.isatty()
    try:
        Repl(color=color).run()
    except KeyboardInterrupt:
        pass
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
