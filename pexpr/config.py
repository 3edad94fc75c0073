from __future__ import annotations
import logging
import os


# Defaults
_DEFAULT_PROMPT = '>'
_DEFAULT_REPL_HOST = '127.0.0.1'
_DEFAULT_REPL_PORT = 8765
_DEFAULT_LOG_LEVEL = 'WARNING'

_TRUTHY = ('1', 'true', 'yes', 'on')

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def str_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def int_from_env(var: str, default: int) -> int:
    raw = str_from_env(var, '')
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}")


def flag_from_env(var: str, default: bool) -> bool:
    raw = str_from_env(var, '')
    if not raw:
        return default
    return raw.lower() in _TRUTHY


def get_prompt() -> str:
    return str_from_env('PEXPR_PROMPT', _DEFAULT_PROMPT)


def get_persist_env() -> bool:
    """Whether interactive front ends keep def bindings between inputs."""
    return flag_from_env('PEXPR_PERSIST_ENV', True)


def get_repl_address() -> tuple[str, int]:
    return (
        str_from_env('PEXPR_REPL_HOST', _DEFAULT_REPL_HOST),
        int_from_env('PEXPR_REPL_PORT', _DEFAULT_REPL_PORT),
    )


def get_color() -> bool:
    return flag_from_env('PEXPR_COLOR', True)


def get_log_level() -> int:
    name = str_from_env('PEXPR_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int | None = None) -> None:
    """Set up root logging once for a front end (REPL, servers)."""
    logging.basicConfig(
        level=get_log_level() if level is None else level,
        format=LOG_FORMAT,
    )
