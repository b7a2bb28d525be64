"""Streaming helpers for the GigaChat provider.

GigaChat streams at most one active call per chunk as ``delta.function_call``
with ``arguments`` as a JSON object, never as an ``index``-keyed array, and
returns an opaque ``functions_state_id`` that must be sent back with the
assistant turn. :class:`SingleCallNormalizer` rewrites each chunk into the
canonical delta shape so the shared accumulator can treat it like any other
provider.
"""

from __future__ import annotations

import json
import random
import string
import time
from dataclasses import replace
from typing import Any, Mapping, Optional

from ..base.errors import MalformedChunkError
from ..base.logging import LogContext
from ..base.resilience.retry import RetryConfig, logging_attempt_logger
from ..base.streaming.canonical_delta import CanonicalDelta, ToolCallFragment
from ..base.streaming.normalizers import CallConvention, base_delta, decode_chunk, first_choice

# finish_reason values that end the assistant turn
END_REASONS = frozenset({"stop", "function_call"})

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LEN = 9


def new_tool_call_id() -> str:
    """Return a fresh call id ``gigachat_<epoch ms>_<9 base36 chars>``.

    GigaChat never sends call ids; tool results are matched by name, so the
    id only has to be unique within the conversation.
    """
    suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_SUFFIX_LEN))  # nosec B311 - not a secret
    return f"gigachat_{int(time.time() * 1000)}_{suffix}"


def arguments_text(arguments: Any) -> str:
    """Render ``function_call.arguments`` as JSON text.

    Strings pass through untouched, structured values are serialized and a
    missing value becomes ``""``.
    """
    if arguments is None:
        return ""
    if isinstance(arguments, str):
        return arguments
    return json.dumps(arguments, ensure_ascii=False)


def function_call_fragment(function_call: Mapping[str, Any]) -> ToolCallFragment:
    """Synthesize the slot-0 fragment for one ``function_call`` object."""
    return ToolCallFragment(
        index=0,
        id=new_tool_call_id(),
        name=function_call.get("name"),
        arguments_chunk=arguments_text(function_call.get("arguments")),
    )


class SingleCallNormalizer:
    """Normalizer for GigaChat chunks (one ``function_call`` per message)."""

    convention = CallConvention.SINGLE_CALL

    def __init__(self, provider: str = "gigachat") -> None:
        self.provider = provider

    def normalize(self, payload: str) -> CanonicalDelta:
        data = decode_chunk(payload, self.provider)
        choice, delta = first_choice(data, self.provider)
        out = base_delta(data, delta)
        if choice is None:
            return out
        out.finish_reason = choice.get("finish_reason")
        out.is_end = out.finish_reason in END_REASONS

        raw_calls = delta.get("tool_calls")
        function_call = delta.get("function_call")
        try:
            if raw_calls:
                out.tool_calls = [ToolCallFragment.from_wire(c) for c in raw_calls]
            elif isinstance(function_call, Mapping):
                out.tool_calls = [function_call_fragment(function_call)]
        except (TypeError, ValueError) as exc:
            raise MalformedChunkError(message=str(exc), provider=self.provider, chunk=payload[:200]) from exc

        out.continuation_token = _state_id(delta) or _state_id(data)
        return out


def _state_id(source: Mapping[str, Any]) -> Optional[str]:
    value = source.get("functions_state_id")
    return value if isinstance(value, str) and value else None


def parse_chunk(raw: str) -> CanonicalDelta:
    """Normalize one raw GigaChat chunk payload (convenience wrapper)."""
    return SingleCallNormalizer().normalize(raw)


class GigaChatStreamingMixin:
    """Mixin providing streaming-related helper hooks."""

    def _default_retry_config(self, phase: str) -> RetryConfig:
        """Return the retry policy for a start phase.

        Parameters:
            phase: Adapter lifecycle phase requesting a retry config
                (``"stream.start"`` or ``"chat.start"``).

        The provider may carry its own ``_retry_config`` (tests use zero
        delays); the attempt logger is always attached.
        """
        base = getattr(self, "_retry_config", None) or RetryConfig()
        ctx = LogContext(provider="gigachat")
        return replace(base, attempt_logger=logging_attempt_logger(self._logger, ctx, phase))


__all__ = [
    "END_REASONS",
    "SingleCallNormalizer",
    "GigaChatStreamingMixin",
    "arguments_text",
    "function_call_fragment",
    "new_tool_call_id",
    "parse_chunk",
]
