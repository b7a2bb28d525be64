"""SupportsStreaming Protocol (single-class module)."""

from __future__ import annotations

from typing import Iterator, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import ChatRequest
from ..streaming import ChatStreamEvent


@runtime_checkable
class SupportsStreaming(Protocol):
    """Capability marker for providers that stream incremental deltas.

    Implementations yield zero or more delta events (``finish=False``) then
    exactly one terminal event (``finish=True``). On error, the terminal
    event carries ``error``.
    """

    def supports_streaming(self) -> bool:  # pragma: no cover - trivial
        return True

    def stream_chat(
        self,
        request: ChatRequest,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[ChatStreamEvent]:  # pragma: no cover - interface
        ...
