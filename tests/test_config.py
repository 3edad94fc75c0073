import logging

import pytest

from pexpr import config


def test_defaults():
    assert config.get_prompt() == ">"
    assert config.get_persist_env() is True
    assert config.get_repl_address() == ("127.0.0.1", 8765)
    assert config.get_log_level() == logging.WARNING
    assert config.get_color() is True


def test_overrides(monkeypatch):
    monkeypatch.setenv("PEXPR_PROMPT", "?")
    monkeypatch.setenv("PEXPR_PERSIST_ENV", "off")
    monkeypatch.setenv("PEXPR_REPL_HOST", "0.0.0.0")
    monkeypatch.setenv("PEXPR_REPL_PORT", "9000")
    monkeypatch.setenv("PEXPR_LOG_LEVEL", "debug")
    monkeypatch.setenv("PEXPR_COLOR", "no")
    assert config.get_prompt() == "?"
    assert config.get_persist_env() is False
    assert config.get_repl_address() == ("0.0.0.0", 9000)
    assert config.get_log_level() == logging.DEBUG
    assert config.get_color() is False


def test_blank_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("PEXPR_PROMPT", "  ")
    monkeypatch.setenv("PEXPR_PERSIST_ENV", "")
    assert config.get_prompt() == ">"
    assert config.get_persist_env() is True


def test_bad_port(monkeypatch):
    monkeypatch.setenv("PEXPR_REPL_PORT", "http")
    with pytest.raises(ValueError, match="PEXPR_REPL_PORT"):
        config.get_repl_address()


def test_unknown_log_level(monkeypatch):
    monkeypatch.setenv("PEXPR_LOG_LEVEL", "chatty")
    assert config.get_log_level() == logging.WARNING
