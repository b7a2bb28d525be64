"""Tool identification and argument extraction from canonical deltas.

These helpers answer the two questions a stream consumer asks of each delta:
which call is being announced (:func:`parse_tools`) and which argument text
belongs to which merge slot (:func:`parse_tool_args`). Both return ``None``
once the delta is terminal.

A fragment with an unexpected shape (non-integer index, non-string argument
text) is skipped: an :class:`ArgumentExtractionWarning` is issued and a
``stream.args.malformed`` event is logged, and streaming continues.
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Optional

from ..errors import ArgumentExtractionWarning
from ..logging import get_logger, log_event
from .canonical_delta import CanonicalDelta, ToolCallFragment

_logger = get_logger("gigachat.stream.tools")


@dataclass(frozen=True)
class ToolIdentity:
    """Identity of an announced tool call."""

    id: Optional[str]
    name: Optional[str]


@dataclass(frozen=True)
class ToolArgs:
    """Argument text for one merge slot."""

    index: int
    args: str


def parse_tools(delta: CanonicalDelta) -> Optional[ToolIdentity]:
    """Return the identity of the first announced call, if any.

    ``None`` when the delta is terminal, carries no fragments, or its first
    fragment has neither an id nor a name.
    """
    if delta.is_end or not delta.tool_calls:
        return None
    first = delta.tool_calls[0]
    if not first.id and not first.name:
        return None
    return ToolIdentity(id=first.id, name=first.name)


def fragment_args(fragment: ToolCallFragment) -> Optional[ToolArgs]:
    """Validate one fragment and return its slot and argument text.

    Missing index defaults to ``0`` and missing argument text to ``""``.
    Malformed fragments yield ``None`` after warning.
    """
    index = 0 if fragment.index is None else fragment.index
    args = "" if fragment.arguments_chunk is None else fragment.arguments_chunk
    if isinstance(index, bool) or not isinstance(index, int) or not isinstance(args, str):
        reason = f"index={type(index).__name__} arguments={type(args).__name__}"
        log_event(_logger, "stream.args.malformed", None, reason=reason, call_id=fragment.id)
        warnings.warn(f"skipping malformed tool-call fragment ({reason})", ArgumentExtractionWarning, stacklevel=3)
        return None
    return ToolArgs(index=index, args=args)


def parse_tool_args(delta: CanonicalDelta) -> Optional[ToolArgs]:
    """Return the slot and argument text of the delta's first fragment.

    ``None`` when the delta is terminal, carries no fragments, or the
    fragment is malformed.
    """
    if delta.is_end or not delta.tool_calls:
        return None
    return fragment_args(delta.tool_calls[0])


__all__ = [
    "ToolIdentity",
    "ToolArgs",
    "parse_tools",
    "parse_tool_args",
    "fragment_args",
]
