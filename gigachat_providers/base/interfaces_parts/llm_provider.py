"""LLMProvider Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import ChatRequest, ChatResponse


@runtime_checkable
class LLMProvider(Protocol):
    """Minimal chat interface for provider adapters.

    Implementations translate ``ChatRequest`` into their wire format and
    normalize the reply into ``ChatResponse``.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"gigachat"``."""
        ...

    def chat(self, request: ChatRequest) -> ChatResponse:
        """Execute a single non-streamed chat completion.

        Failure handling: provider failures are not raised; they are encoded
        in ``ChatResponse.meta.extra`` (``error`` and ``code``).
        """
        ...
