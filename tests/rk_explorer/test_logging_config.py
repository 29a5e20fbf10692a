from __future__ import annotations

import logging

from pythonjsonlogger import jsonlogger

from rk_explorer.logging_config import configure_logging


def test_json_is_default(monkeypatch):
    monkeypatch.delenv("RK_EXPLORER_LOG_FORMAT", raising=False)

    configure_logging()

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, jsonlogger.JsonFormatter)


def test_plain_from_env(monkeypatch):
    monkeypatch.setenv("RK_EXPLORER_LOG_FORMAT", "plain")

    configure_logging(level=logging.DEBUG)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert not isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_force_format_wins(monkeypatch):
    monkeypatch.setenv("RK_EXPLORER_LOG_FORMAT", "plain")

    configure_logging(force_format="json")

    assert isinstance(logging.getLogger().handlers[0].formatter, jsonlogger.JsonFormatter)
