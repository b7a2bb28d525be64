"""Stream events and their accumulation into a response.

A provider stream yields zero or more delta events followed by exactly one
terminal event (``finish=True``). Failures never raise mid-stream; they are
reported as the terminal event's ``error`` string (``"<code>:<message>"``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from ..models import ChatResponse, ContentPart, ProviderMetadata
from ..models_parts.tool_call import ToolCall
from .accumulator import ToolCallAccumulator
from .canonical_delta import CanonicalDelta, ToolCallFragment


@dataclass
class ChatStreamEvent:
    """One step of a provider stream.

    Fields:
      provider: canonical provider name
      model: model id/name
      delta: text delta (``None`` for control and terminal events)
      canonical: the normalized chunk this event was built from
      finish: True on the terminal event only
      error: ``"<code>:<message>"`` on a failed terminal event
      raw: raw chunk payload (debugging only)
    """

    provider: str
    model: str
    delta: str | None
    canonical: CanonicalDelta | None = None
    finish: bool = False
    error: str | None = None
    raw: Any | None = None

    def is_error(self) -> bool:
        return self.error is not None

    @property
    def reasoning(self) -> str:
        return self.canonical.reasoning if self.canonical else ""

    @property
    def tool_calls(self) -> List[ToolCallFragment]:
        return list(self.canonical.tool_calls) if self.canonical else []

    @property
    def continuation_token(self) -> Optional[str]:
        return self.canonical.continuation_token if self.canonical else None

    @property
    def is_end(self) -> bool:
        """Whether the provider marked this chunk as the end of the turn."""
        return bool(self.canonical and self.canonical.is_end)


def accumulate_events(events: Iterable[ChatStreamEvent]) -> ChatResponse:
    """Accumulate a stream of events into a :class:`ChatResponse`.

    - Text and reasoning deltas are concatenated.
    - Tool-call fragments are merged per index into complete calls.
    - The last continuation token seen is kept.
    - An error event yields a response whose ``meta.extra`` holds ``error``
      and ``code``; text accumulated before the failure is preserved.
    """
    events_list: List[ChatStreamEvent] = list(events)
    if not events_list:
        meta = ProviderMetadata(provider_name="unknown", model_name="unknown")
        return ChatResponse(text="", parts=None, raw=None, meta=meta)

    provider = events_list[0].provider
    model = events_list[0].model
    acc = ToolCallAccumulator()
    for evt in events_list:
        if evt.canonical is not None:
            acc.add(evt.canonical)

    if error_event := next((e for e in events_list if e.error), None):
        code = error_event.error.split(":", 1)[0] if ":" in error_event.error else None
        meta = ProviderMetadata(
            provider_name=provider,
            model_name=model,
            extra={"error": error_event.error, "code": code, "stream_events": len(events_list)},
        )
        return ChatResponse(text=acc.text or None, parts=None, raw=None, meta=meta)

    full_text = acc.text
    calls: List[ToolCall] = acc.tool_calls()
    parts = [ContentPart(type="text", text=full_text)] if full_text else None
    meta = ProviderMetadata(
        provider_name=provider,
        model_name=model,
        response_id=acc.response_id,
        finish_reason=acc.finish_reason,
        usage=acc.usage,
        extra={"stream_events": len(events_list)},
    )
    return ChatResponse(
        text=full_text,
        parts=parts,
        raw=None,
        meta=meta,
        reasoning=acc.reasoning or None,
        tool_calls=calls or None,
        continuation_token=acc.continuation_token,
    )


__all__ = [
    "ChatStreamEvent",
    "accumulate_events",
]
