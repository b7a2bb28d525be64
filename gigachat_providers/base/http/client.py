"""Shared HTTP client pool.

Provides thread-safe reuse of ``httpx.Client`` instances so the identity
exchange, completions and uploads share connections instead of allocating a
client per call.

Clients are keyed by ``(base_url, purpose, verify)``: GigaChat deployments
commonly run behind a private CA, so TLS verification is part of the pool
identity. Timeouts come from :func:`httpx_timeout`; individual requests may
still pass their own. All clients are closed at interpreter exit.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Dict, Optional, Tuple, Union

import httpx

from ..timeouts import httpx_timeout

VerifyType = Union[bool, str]

_CLIENTS: Dict[Tuple[Optional[str], str, VerifyType], httpx.Client] = {}
_LOCK = threading.RLock()
_log = logging.getLogger("gigachat.http")


def get_httpx_client(base_url: Optional[str], purpose: str, *, verify: VerifyType = True) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: API base URL set on the client so callers can use relative
            paths. ``None`` groups clients that are used with absolute URLs
            (e.g. the identity endpoint).
        purpose: Short discriminator such as ``"gigachat.auth"`` or
            ``"gigachat.chat"``.
        verify: TLS verification flag or CA bundle path.

    Returns:
        A reusable ``httpx.Client`` instance.
    """
    key = (base_url, purpose, verify)
    client = _CLIENTS.get(key)
    if client is not None:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None:
            return client
        kwargs = {"timeout": httpx_timeout(), "verify": verify}
        client = httpx.Client(base_url=base_url, **kwargs) if base_url else httpx.Client(**kwargs)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients (test teardown, shutdown)."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except Exception:  # nosec B110 - shutdown path, nothing actionable
                _log.debug("client close failed", exc_info=True)
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients", "VerifyType"]
