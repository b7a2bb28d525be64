"""Fold canonical deltas into a completed assistant turn.

:class:`ToolCallAccumulator` is fed deltas in arrival order and keeps:

* text and reasoning, concatenated;
* one pending call per fragment ``index``; the first id and first name seen
  for a slot win (single-call providers mint a fresh id on every chunk), and
  argument pieces are appended in arrival order;
* the most recent continuation token;
* the terminal flag, which is sticky.

Fragments arriving on the terminal delta itself are folded like any other:
single-call providers commonly deliver the whole call together with
``finish_reason="function_call"``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models import Message, ToolCall
from .canonical_delta import CanonicalDelta
from .tool_helpers import fragment_args


@dataclass
class _PendingCall:
    index: int
    id: Optional[str] = None
    name: Optional[str] = None
    chunks: List[str] = field(default_factory=list)

    def to_tool_call(self) -> ToolCall:
        return ToolCall(
            id=self.id or f"call_{self.index}",
            name=self.name or "",
            arguments="".join(self.chunks),
        )


class ToolCallAccumulator:
    """Stateful fold over one stream's canonical deltas."""

    def __init__(self) -> None:
        self._content: List[str] = []
        self._reasoning: List[str] = []
        self._calls: Dict[int, _PendingCall] = {}
        self.continuation_token: Optional[str] = None
        self.finish_reason: Optional[str] = None
        self.usage: Optional[Dict[str, Any]] = None
        self.response_id: Optional[str] = None
        self.ended = False
        self.deltas = 0

    def add(self, delta: CanonicalDelta) -> None:
        """Fold one delta into the accumulated state."""
        self.deltas += 1
        if delta.content:
            self._content.append(delta.content)
        if delta.reasoning:
            self._reasoning.append(delta.reasoning)
        for fragment in delta.tool_calls:
            extracted = fragment_args(fragment)
            if extracted is None:
                continue
            pending = self._calls.get(extracted.index)
            if pending is None:
                pending = self._calls[extracted.index] = _PendingCall(index=extracted.index)
            if fragment.id and not pending.id:
                pending.id = fragment.id
            if fragment.name and not pending.name:
                pending.name = fragment.name
            if extracted.args:
                pending.chunks.append(extracted.args)
        if delta.continuation_token:
            self.continuation_token = delta.continuation_token
        if delta.finish_reason:
            self.finish_reason = delta.finish_reason
        if delta.usage:
            self.usage = delta.usage
        if delta.response_id and not self.response_id:
            self.response_id = delta.response_id
        if delta.is_end:
            self.ended = True

    @property
    def text(self) -> str:
        return "".join(self._content)

    @property
    def reasoning(self) -> str:
        return "".join(self._reasoning)

    def tool_calls(self) -> List[ToolCall]:
        """Completed calls ordered by slot index."""
        return [self._calls[i].to_tool_call() for i in sorted(self._calls)]

    def message(self) -> Message:
        """Return the assistant message to append to history."""
        calls = self.tool_calls()
        return Message(
            role="assistant",
            content=self.text,
            tool_calls=calls or None,
            continuation_token=self.continuation_token,
        )


__all__ = ["ToolCallAccumulator"]
