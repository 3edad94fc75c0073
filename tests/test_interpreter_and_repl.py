import io

import pytest

from pexpr import errors
from pexpr.interpreter import Interpreter
from pexpr.repl import Repl


def test_persistent_environment(interp):
    assert interp.eval("(def x 2)") == 2
    assert interp.eval("(plus x 1)") == 3
    assert interp.eval('(def name "pexpr") (concat name "!")') == "pexpr!"
    assert interp.eval("(plus x (length name))") == 7


def test_fresh_environment_per_call():
    interp = Interpreter(persist_env=False)
    assert interp.eval("(def x 2) x") == 2
    with pytest.raises(errors.PexprUndefinedConstant):
        interp.eval("x")


def test_reset_forgets_constants(interp):
    interp.eval("(def x 2)")
    interp.reset()
    with pytest.raises(errors.PexprUndefinedConstant):
        interp.eval("x")


def test_failed_call_keeps_parser_state_fresh(interp):
    with pytest.raises(errors.PexprSyntaxError):
        interp.eval("(plus 1")
    assert interp.eval("(plus 1 1)") == 2


@pytest.fixture
def repl(interp):
    return Repl(interp=interp, prompt=">", color=False)


@pytest.mark.parametrize(
    "line,expected",
    [
        ("(plus 1 2)", "3"),
        ('"hi"', '"hi"'),
        ('[1 "a" false]', '[ 1 "a" false ]'),
        ("(equals 1 1)", "true"),
        ('(int "a")', '"a" cannot be cast to an integer.'),
        ("(plus 1", "Parsing error: parenthesis mismatch, depth:1, expected:0"),
        ("", None),
        ("   \n", None),
    ],
)
def test_repl_process(repl, line, expected):
    assert repl.process(line) == expected


def test_repl_reset_command(repl):
    repl.process("(def x 1)")
    assert repl.process(":reset") == "constants cleared"
    assert repl.process("x") == "Evaluation error: undefined constant x"


def test_repl_run_until_quit(repl):
    stdin = io.StringIO("(def x 4)\n(plus x 1)\n\n:quit\n(plus 1 1)\n")
    stdout = io.StringIO()
    repl.run(stdin, stdout)
    assert stdout.getvalue() == "> 4\n> 5\n> > "


def test_repl_run_until_eof(repl):
    stdout = io.StringIO()
    repl.run(io.StringIO('(concat "a" "b")\n'), stdout)
    assert stdout.getvalue() == '> "ab"\n> '


def test_repl_honours_config(monkeypatch):
    monkeypatch.setenv("PEXPR_PROMPT", "pexpr>")
    monkeypatch.setenv("PEXPR_PERSIST_ENV", "0")
    repl = Repl()
    assert repl.prompt == "pexpr>"
    repl.process("(def x 1)")
    assert repl.process("x") == "Evaluation error: undefined constant x"
