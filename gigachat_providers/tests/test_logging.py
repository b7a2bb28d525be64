"""Structured event helpers and logger configuration."""
from __future__ import annotations

import json
import logging

from gigachat_providers.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


def test_child_loggers_share_the_root():
    log = get_logger("gigachat.auth")
    assert log.name == "gigachat.auth" and log.propagate  # nosec B101
    assert get_logger("history").name == "gigachat.history"  # nosec B101
    assert get_logger().propagate is False  # nosec B101


def test_normalized_event_carries_canonical_keys(log_events):
    ctx = LogContext(provider="gigachat", model="GigaChat", session_id="s-1", extra={"scope": "PERS"})
    normalized_log_event(get_logger("t"), "chat.start", ctx, phase="start", attempt=1, foo="bar")
    (evt,) = log_events.named("chat.start")
    for key in REQUIRED_NORMALIZED_KEYS:
        if key != "error_code":
            assert key in evt  # nosec B101
    assert "error_code" not in evt  # nosec B101
    assert evt["session_id"] == "s-1" and evt["scope"] == "PERS" and evt["foo"] == "bar"  # nosec B101
    assert evt["tokens"] is None and evt["structured"] is True  # nosec B101


def test_extra_fields_do_not_override_canonical(log_events):
    normalized_log_event(get_logger("t"), "x", phase="finalize", attempt=2, tokens=[("prompt", 3)], error_code="auth")
    (evt,) = log_events.named("x")
    assert evt["attempt"] == 2 and evt["tokens"] == {"prompt": 3} and evt["error_code"] == "auth"  # nosec B101


def test_log_event_drops_none_fields(log_events):
    log_event(get_logger("t"), "plain", None, a=None, b=1)
    (evt,) = log_events.named("plain")
    assert evt == {"event": "plain", "b": 1}  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "gigachat.jsonl"
    logger = configure_logger(level="WARNING", file_path=str(path))
    try:
        log_event(get_logger("t"), "kept", level=logging.WARNING, n=1)
        for h in logger.handlers:
            h.flush()
        line = path.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["event"] == "kept"  # nosec B101
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not any(getattr(h, "_gigachat_file_handler", False) for h in logger.handlers)  # nosec B101
