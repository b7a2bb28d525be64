"""
ChatResponse DTO representing a completed assistant turn.

Carries the text, optional reasoning, reassembled tool calls and the
continuation token that must accompany the turn when it is replayed.
``raw`` is excluded from serialization.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .content_part import ContentPart
from .message import Message
from .provider_metadata import ProviderMetadata
from .tool_call import ToolCall


@dataclass
class ChatResponse:
    """Provider-agnostic response from a chat invocation.

    Attributes:
        text: Plain text completion; ``None`` on failure.
        parts: Structured content parts when available.
        raw: Provider native payload for diagnostics only.
        meta: Execution `ProviderMetadata`; ``meta.extra["error"]`` is set on failure.
        reasoning: Reasoning text when the model streams it separately.
        tool_calls: Completed tool calls, in index order.
        continuation_token: Opaque state to send back with this turn.
    """

    text: Optional[str]
    parts: Optional[List[ContentPart]]
    raw: Optional[Any]
    meta: ProviderMetadata
    reasoning: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    continuation_token: Optional[str] = None

    @property
    def error(self) -> Optional[str]:
        """Error text recorded in metadata, if the call failed."""
        return self.meta.extra.get("error")

    def to_message(self) -> Message:
        """Return the assistant `Message` to append to history for the next turn."""
        return Message(
            role="assistant",
            content=self.text or "",
            tool_calls=list(self.tool_calls) if self.tool_calls else None,
            continuation_token=self.continuation_token,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary excluding raw provider objects."""
        return {
            "text": self.text,
            "parts": [p.to_dict() for p in self.parts] if self.parts else None,
            "reasoning": self.reasoning,
            "tool_calls": [c.to_dict() for c in self.tool_calls] if self.tool_calls else None,
            "continuation_token": self.continuation_token,
            "raw": None,
            "meta": self.meta.to_dict(),
        }


__all__ = [
    "ChatResponse",
]
