"""Cooperative cancellation token implementation.

A ``CancellationToken`` is polled by the stream adapter before every chunk.
Resources that block outside that loop (an open HTTP response waiting for
the next line) register a close callback with :meth:`on_cancel` so that a
cancel from another thread unblocks the reader promptly.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List

from .cancelled_error import CancelledError

_log = logging.getLogger("gigachat.cancellation")


class CancellationToken:
    """Thread-safe cooperative cancellation flag with cancel callbacks."""

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None
        self._lock = Lock()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> str | None:
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation and run registered callbacks once."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason
            callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            try:
                cb()
            except Exception:  # callbacks close sockets; a failing close must not block the rest
                _log.debug("cancel callback failed", exc_info=True)

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback``; runs immediately if already cancelled.

        Returns a function that unregisters the callback.
        """
        with self._lock:
            already = self._cancelled
            if not already:
                self._callbacks.append(callback)
        if already:
            callback()

        def _unregister() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return _unregister

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._cancelled:
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
