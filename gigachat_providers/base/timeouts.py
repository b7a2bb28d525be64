"""Centralized timeout values for identity, completion and stream I/O.

All network calls take their limits from :func:`get_timeout_config`, turned
into an ``httpx.Timeout`` by :func:`httpx_timeout`. No other module hard-codes
a timeout.

Environment overrides (seconds, all optional, positive floats):
    PT_TIMEOUT_START_SECONDS    connect + first byte of a completion or upload
    PT_TIMEOUT_STREAM_SECONDS   idle gap between two stream lines
    PT_TIMEOUT_HTTP_SECONDS     whole non-streamed request (identity, chat)
    PT_TIMEOUT_OVERALL_SECONDS  informative cap, not enforced

The configuration is cached and recomputed only when one of the variables
changes, so tests can adjust it with ``monkeypatch.setenv``.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Connection establishment for completion and
            upload requests.
        stream_timeout_seconds: Read timeout between streamed lines.
        http_timeout_seconds: Read timeout of non-streamed requests.
        overall_timeout_seconds: Optional end-to-end cap (informative).
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0
    overall_timeout_seconds: float | None = None


_ENV_NAMES = (
    "PT_TIMEOUT_START_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
    "PT_TIMEOUT_HTTP_SECONDS",
    "PT_TIMEOUT_OVERALL_SECONDS",
)

_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Read ``name`` as a positive float; fall back to ``default`` otherwise."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        start_timeout_seconds=float(_parse_env_float("PT_TIMEOUT_START_SECONDS", 30.0)),
        stream_timeout_seconds=float(_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", 60.0)),
        http_timeout_seconds=float(_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", 30.0)),
        overall_timeout_seconds=_parse_env_float("PT_TIMEOUT_OVERALL_SECONDS", None),
    )
    _ENV_GUARD = guard
    return _CACHED


def httpx_timeout(*, stream: bool = False, cfg: TimeoutConfig | None = None) -> httpx.Timeout:
    """Build the ``httpx.Timeout`` for one request.

    Streamed requests use the stream idle timeout for reads; everything else
    uses the HTTP timeout. Connect always uses the start timeout.
    """
    cfg = cfg or get_timeout_config()
    read = cfg.stream_timeout_seconds if stream else cfg.http_timeout_seconds
    return httpx.Timeout(read, connect=cfg.start_timeout_seconds)


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "httpx_timeout",
]
