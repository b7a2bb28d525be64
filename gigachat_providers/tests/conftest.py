"""Pytest configuration for the GigaChat adapter test suite.

Every test runs with a clean configuration environment (no ``GIGACHAT_*``
variables, no dotenv file, no external config file) and a fresh HTTP client
pool, so nothing reaches the network or depends on the developer machine.
"""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Dict, Iterator, List

import pytest

from gigachat_providers.base.http import close_all_clients
from gigachat_providers.base.logging import ROOT_LOGGER_NAME, get_logger
from gigachat_providers.config import reset_config_cache

_ENV_PREFIXES = ("GIGACHAT_", "PT_TIMEOUT_")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip provider env vars and point dotenv at a missing file."""
    for name in list(os.environ):
        if name.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("PROVIDERS_CONFIG_FILE", raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make retry back-off instantaneous."""
    monkeypatch.setattr(time, "sleep", lambda *_: None)


class _ListHandler(logging.Handler):
    """Capture formatted log messages into a list."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


class EventLog:
    """Parsed structured events captured from the shared logger."""

    def __init__(self, handler: _ListHandler) -> None:
        self._handler = handler

    @property
    def events(self) -> List[Dict[str, Any]]:
        out = []
        for msg in self._handler.messages:
            try:
                out.append(json.loads(msg))
            except ValueError:
                continue
        return out

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]


@pytest.fixture()
def log_events() -> Iterator[EventLog]:
    """Attach a capturing handler to the shared ``gigachat`` logger.

    The shared logger does not propagate to the root logger, so ``caplog``
    cannot see its records.
    """
    get_logger()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handler = _ListHandler()
    logger.addHandler(handler)
    try:
        yield EventLog(handler)
    finally:
        logger.removeHandler(handler)
