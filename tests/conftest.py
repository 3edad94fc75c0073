import pytest

from pexpr.interpreter import Interpreter
from pexpr.types.environment import Environment


@pytest.fixture
def env():
    """Fresh constant environment."""
    return Environment()


@pytest.fixture
def interp():
    """Interpreter that keeps def bindings between calls."""
    return Interpreter(persist_env=True)


@pytest.fixture(autouse=True)
def _clean_pexpr_env(monkeypatch):
    # Keep the caller's shell configuration out of the tests
    for var in (
        "PEXPR_PERSIST_ENV",
        "PEXPR_PROMPT",
        "PEXPR_REPL_HOST",
        "PEXPR_REPL_PORT",
        "PEXPR_LOG_LEVEL",
        "PEXPR_COLOR",
    ):
        monkeypatch.delenv(var, raising=False)
