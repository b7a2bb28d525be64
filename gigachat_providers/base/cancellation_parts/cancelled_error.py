"""Cancellation error type."""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cooperative cancellation request.

    Distinct from transport failures so the stream adapter can map it to a
    terminal ``cancelled`` event instead of an error classification.
    """


__all__ = ["CancelledError"]
