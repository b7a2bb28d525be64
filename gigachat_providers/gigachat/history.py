"""History reshaping: canonical messages to GigaChat messages.

GigaChat differs from the canonical (OpenAI-style) history in three ways:

* tool results use role ``function`` and are matched to their call by
  function ``name`` rather than by ``tool_call_id``;
* an assistant turn carries at most one ``function_call`` whose
  ``arguments`` is a JSON object, not JSON text;
* the opaque ``functions_state_id`` returned with an assistant turn must be
  sent back on that turn.

:func:`reshape` is pure and order preserving: exactly one output message per
input message. Content is always flattened to a string.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..base.dto import FunctionCallDTO
from ..base.logging import get_logger, log_event
from ..base.models import Message
from .content import flatten

_logger = get_logger("gigachat.history")

CanonicalMessage = Union[Message, Mapping[str, Any]]


def _as_message(item: CanonicalMessage) -> Message:
    return item if isinstance(item, Message) else Message.from_dict(item)


def _function_message(msg: Message, call_names: Dict[str, str], position: int) -> Dict[str, Any]:
    out: Dict[str, Any] = {"role": "function", "content": flatten(msg.content)}
    name = msg.name or (call_names.get(msg.tool_call_id) if msg.tool_call_id else None)
    if name:
        out["name"] = name
    else:
        log_event(
            _logger,
            "history.tool_name.unresolved",
            None,
            level=logging.WARNING,
            position=position,
            tool_call_id=msg.tool_call_id,
        )
    return out


def _assistant_call_message(msg: Message, position: int) -> Dict[str, Any]:
    calls = msg.tool_calls or []
    first = calls[0]
    if len(calls) > 1:
        log_event(
            _logger,
            "history.tool_calls.truncated",
            None,
            level=logging.WARNING,
            position=position,
            kept=first.name,
            dropped=[c.name for c in calls[1:]],
        )
    out: Dict[str, Any] = {
        "role": "assistant",
        "content": flatten(msg.content) if msg.content else "",
        "function_call": FunctionCallDTO(name=first.name, arguments=first.parsed_arguments()).model_dump(),
    }
    if msg.continuation_token:
        out["functions_state_id"] = msg.continuation_token
    return out


def _plain_message(msg: Message) -> Dict[str, Any]:
    out: Dict[str, Any] = {"role": msg.role, "content": flatten(msg.content)}
    if msg.name:
        out["name"] = msg.name
    if msg.role == "assistant" and msg.continuation_token:
        out["functions_state_id"] = msg.continuation_token
    if msg.attachments:
        out["attachments"] = list(msg.attachments)
    return out


def reshape(history: Iterable[CanonicalMessage]) -> List[Dict[str, Any]]:
    """Translate canonical history into GigaChat request messages.

    Parameters:
        history: Canonical messages (``Message`` objects or their mapping form).

    Returns:
        Provider messages, one per input, in the same order.

    Rules:
        - ``tool`` -> ``function`` with flattened content and the originating
          call's name (explicit ``name``, else looked up by ``tool_call_id``
          among earlier assistant calls).
        - ``assistant`` with tool calls -> content (or ``""``), a single
          ``function_call`` built from the first call (extra calls are logged
          and dropped), and ``functions_state_id`` when a token is present.
        - other roles -> flattened content; ``tool_call_id`` and ``tool_calls``
          are dropped, ``name`` and ``attachments`` kept.
    """
    call_names: Dict[str, str] = {}
    out: List[Dict[str, Any]] = []
    for position, item in enumerate(history):
        msg = _as_message(item)
        if msg.role in ("tool", "function"):
            out.append(_function_message(msg, call_names, position))
            continue
        if msg.role == "assistant" and msg.tool_calls:
            for call in msg.tool_calls:
                if call.id:
                    call_names[call.id] = call.name
            out.append(_assistant_call_message(msg, position))
            continue
        out.append(_plain_message(msg))
    return out


def continuation_token_of(messages: Iterable[Mapping[str, Any]]) -> Optional[str]:
    """Return the last ``functions_state_id`` present in provider messages."""
    token: Optional[str] = None
    for m in messages:
        token = m.get("functions_state_id") or token
    return token


__all__ = ["reshape", "continuation_token_of", "CanonicalMessage"]
