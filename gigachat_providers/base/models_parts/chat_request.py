"""
ChatRequest DTO for canonical chat invocations.

The request is provider-agnostic: tools use the OpenAI ``{"type":
"function", "function": {...}}`` shape and ``tool_choice`` the OpenAI
literals. :meth:`ChatRequest.to_payload` produces the canonical JSON body
that provider transformers rewrite into their own wire format.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .message import Message


@dataclass
class ChatRequest:
    """Canonical chat request sent to provider adapters.

    Attributes:
        model: Target model identifier; ``None`` uses the provider default.
        messages: Ordered list of chat `Message` instances (owned by the caller).
        max_tokens: Maximum tokens for the completion.
        temperature: Sampling temperature when supported by the provider.
        tools: Optional tool specifications in canonical form.
        tool_choice: ``"auto"``, ``"none"``, ``"required"`` or an object
            naming a function.
        session_id: Conversation identifier forwarded as ``X-Session-ID``.
        extra: JSON-serializable escape hatch merged into the payload
            (e.g. ``top_p``, ``repetition_penalty``).
    """

    model: Optional[str]
    messages: List[Message]
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    session_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self, model: str, *, stream: bool = False) -> Dict[str, Any]:
        """Return the canonical JSON body for this request.

        Parameters:
            model: Resolved model name (request model or provider default).
            stream: Whether a streamed response is requested.
        """
        payload: Dict[str, Any] = dict(self.extra)
        payload["model"] = model
        payload["messages"] = [m.to_dict() for m in self.messages]
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.tools:
            payload["tools"] = list(self.tools)
        if self.tool_choice is not None:
            payload["tool_choice"] = self.tool_choice
        payload["stream"] = stream
        return payload


__all__ = [
    "ChatRequest",
]
