"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` signals cancellation to a running stream;
``CancelledError`` is raised by code that observes it.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
