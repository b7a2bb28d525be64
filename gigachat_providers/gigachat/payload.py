"""Outbound payload transformation (canonical body -> GigaChat body).

Pure and total: the input mapping is never mutated and every input yields a
body. Keys the transformer does not know pass through unchanged.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..base.dto import FunctionSpecDTO
from ..base.logging import get_logger, log_event
from .history import reshape

_logger = get_logger("gigachat.payload")

# Canonical keys GigaChat rejects or ignores.
_STRIPPED_KEYS = ("parallel_tool_calls", "tool_config")
_CHOICE_LITERALS = ("auto", "none")


def _function_spec(tool: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    fn = tool.get("function") if isinstance(tool.get("function"), Mapping) else tool
    name = fn.get("name")
    if not name:
        return None
    return FunctionSpecDTO(
        name=name,
        description=fn.get("description"),
        parameters=fn.get("parameters"),
    ).to_wire()


def _functions(tools: Any) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for tool in tools or []:
        if not isinstance(tool, Mapping):
            continue
        spec = _function_spec(tool)
        if spec is not None:
            out.append(spec)
    return out


def _function_call(choice: Any) -> Any:
    """Translate ``tool_choice``; ``None`` means drop it."""
    if isinstance(choice, str) and choice in _CHOICE_LITERALS:
        return choice
    if isinstance(choice, Mapping):
        fn = choice.get("function")
        name = fn.get("name") if isinstance(fn, Mapping) else choice.get("name")
        if name:
            return {"name": name}
    return None


def build_payload(canonical: Mapping[str, Any]) -> Dict[str, Any]:
    """Rewrite a canonical chat body into the GigaChat request body.

    - ``messages`` are replaced by their reshaped form;
    - ``tools`` become ``functions`` (``{name, description?, parameters}``);
    - ``tool_choice`` ``"auto"``/``"none"`` becomes ``function_call`` with the
      same literal, an object naming a function becomes ``{"name": ...}``,
      anything else is dropped (logged);
    - a streamed request gets ``update_interval: 0``;
    - ``parallel_tool_calls`` and ``tool_config`` are removed.
    """
    body: Dict[str, Any] = dict(canonical)

    if "messages" in body:
        body["messages"] = reshape(body["messages"] or [])

    if "tools" in body:
        functions = _functions(body.pop("tools"))
        if functions:
            body["functions"] = functions

    if "tool_choice" in body:
        choice = body.pop("tool_choice")
        translated = _function_call(choice)
        if translated is not None:
            body["function_call"] = translated
        elif choice is not None:
            log_event(
                _logger,
                "payload.tool_choice.dropped",
                None,
                level=logging.WARNING,
                tool_choice=choice if isinstance(choice, str) else type(choice).__name__,
            )

    if body.get("stream"):
        body["update_interval"] = 0

    for key in _STRIPPED_KEYS:
        body.pop(key, None)
    return body


__all__ = ["build_payload"]
