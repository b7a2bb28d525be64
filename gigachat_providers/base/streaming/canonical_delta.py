"""Canonical stream delta types.

Every provider chunk is normalized into one :class:`CanonicalDelta` before it
reaches the accumulator or a consumer. Tool calls arrive as
:class:`ToolCallFragment` items keyed by ``index``; fragments sharing an index
belong to the same call and their ``arguments_chunk`` values are concatenated
in arrival order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class ToolCallFragment:
    """One piece of a tool call as seen in a single chunk.

    Attributes:
        index: Merge slot. Single-call providers always use ``0``.
        id: Call identifier when the chunk carries one.
        name: Function name when the chunk carries one.
        arguments_chunk: Piece of the JSON argument text.
    """

    index: int = 0
    id: Optional[str] = None
    name: Optional[str] = None
    arguments_chunk: Any = ""

    @classmethod
    def from_wire(cls, entry: Mapping[str, Any]) -> "ToolCallFragment":
        """Build from an OpenAI-style ``tool_calls`` entry without coercion.

        Values are copied as received; shape problems are reported later by
        the argument extraction helpers.
        """
        if not isinstance(entry, Mapping):
            raise TypeError(f"tool call entry must be an object, got {type(entry).__name__}")
        fn = entry.get("function") or {}
        return cls(
            index=entry.get("index", 0),
            id=entry.get("id"),
            name=fn.get("name") if isinstance(fn, Mapping) else None,
            arguments_chunk=fn.get("arguments", "") if isinstance(fn, Mapping) else fn,
        )


@dataclass
class CanonicalDelta:
    """Provider-independent view of one parsed chunk.

    Attributes:
        content: Text delta (``""`` when absent).
        reasoning: Reasoning text delta (``""`` when absent).
        is_end: True when the provider signalled the end of the turn. Once a
            stream has produced a delta with ``is_end`` it is never retracted.
        tool_calls: Tool call fragments carried by the chunk.
        continuation_token: Opaque provider state to replay next turn.
        finish_reason: Raw provider finish reason, if any.
        usage: Token usage reported by the chunk, if any.
        response_id: Provider response id, if any.
    """

    content: str = ""
    reasoning: str = ""
    is_end: bool = False
    tool_calls: List[ToolCallFragment] = field(default_factory=list)
    continuation_token: Optional[str] = None
    finish_reason: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None
    response_id: Optional[str] = None

    def is_empty(self) -> bool:
        """True when the delta carries nothing a consumer would act on."""
        return not (self.content or self.reasoning or self.tool_calls or self.continuation_token or self.is_end)


__all__ = ["CanonicalDelta", "ToolCallFragment"]
