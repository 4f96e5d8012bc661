"""Tests for centralized logging configuration."""

import logging

from common.logging_utils import (
    ContextFormatter,
    Timer,
    configure_logging,
    debug_env_enabled,
    extra_context,
    is_debug_enabled,
)


def test_debug_toggle_enables_stdout_tracing(monkeypatch, capsys):
    monkeypatch.setenv("VLP_DEBUG", "true")
    configure_logging()
    logger = logging.getLogger("vlp.test")
    assert is_debug_enabled(logger)
    logger.debug("tracing", extra=extra_context(event="check", outcome=None))
    out = capsys.readouterr().out
    assert "[vlp] [DEBUG] tracing [event=check]" in out


def test_level_from_env(monkeypatch):
    monkeypatch.delenv("VLP_DEBUG", raising=False)
    monkeypatch.setenv("VLP_LOG_LEVEL", "warning")
    configure_logging()
    assert logging.getLogger().level == logging.WARNING
    assert not debug_env_enabled()


def test_unknown_level_falls_back_to_info(monkeypatch):
    monkeypatch.delenv("VLP_DEBUG", raising=False)
    monkeypatch.setenv("VLP_LOG_LEVEL", "chatty")
    configure_logging()
    assert logging.getLogger().level == logging.INFO


def test_reconfigure_does_not_stack_handlers(monkeypatch):
    monkeypatch.delenv("VLP_DEBUG", raising=False)
    before = len(logging.getLogger().handlers)
    configure_logging()
    configure_logging()
    assert len(logging.getLogger().handlers) == before + 1


def test_formatter_without_context():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "plain %s", ("msg",), None)
    assert ContextFormatter("%(message)s").format(record) == "plain msg"


def test_timer_measures():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0
