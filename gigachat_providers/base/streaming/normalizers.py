"""Inbound delta normalization strategies.

Providers differ in how they express tool calls inside streamed chunks:

* ``MULTI_CALL`` - OpenAI-style ``delta.tool_calls`` array, fragments keyed
  by ``index``;
* ``SINGLE_CALL`` - one active ``delta.function_call`` object per chunk plus
  an opaque continuation token (GigaChat).

Each convention has one :class:`DeltaNormalizer` implementation turning the
JSON payload of a chunk into a :class:`CanonicalDelta`. Implementations are
resolved lazily by :func:`normalizer_for` so this base module never imports
provider packages at import time.
"""
from __future__ import annotations

import json
from enum import Enum
from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

from ..errors import MalformedChunkError, ProviderError, code_for_status
from .canonical_delta import CanonicalDelta, ToolCallFragment

_CHUNK_EXCERPT = 200


class CallConvention(str, Enum):
    """Tool-call wire convention of a provider."""

    MULTI_CALL = "multi_call"
    SINGLE_CALL = "single_call"


@runtime_checkable
class DeltaNormalizer(Protocol):
    """Capability: turn one chunk payload into a canonical delta.

    ``normalize`` raises :class:`MalformedChunkError` for unparsable payloads
    and :class:`ProviderError` when the chunk is a provider error object.
    """

    convention: CallConvention

    def normalize(self, payload: str) -> CanonicalDelta:  # pragma: no cover - interface
        ...


def decode_chunk(payload: str, provider: str) -> Dict[str, Any]:
    """Parse a chunk payload and surface provider error objects.

    Raises:
        MalformedChunkError: payload is not a JSON object.
        ProviderError: payload carries an ``error`` member; the message is the
            provider's own.
    """
    try:
        data = json.loads(payload)
    except ValueError as exc:
        raise MalformedChunkError(
            message=f"unparsable chunk: {exc}",
            provider=provider,
            chunk=payload[:_CHUNK_EXCERPT],
            raw=exc,
        ) from exc
    if not isinstance(data, dict):
        raise MalformedChunkError(
            message=f"chunk is not an object: {type(data).__name__}",
            provider=provider,
            chunk=payload[:_CHUNK_EXCERPT],
        )
    error = data.get("error")
    if error:
        raise provider_error_from_object(error, provider)
    return data


def provider_error_from_object(error: Any, provider: str) -> ProviderError:
    """Build a :class:`ProviderError` from an ``error`` member of any shape."""
    status: Optional[int] = None
    if isinstance(error, Mapping):
        message = str(error.get("message") or error.get("detail") or json.dumps(error, ensure_ascii=False))
        for key in ("status", "code"):
            candidate = error.get(key)
            if isinstance(candidate, int):
                status = candidate
                break
    else:
        message = str(error)
    return ProviderError(code=code_for_status(status), message=message, provider=provider)


def first_choice(data: Mapping[str, Any], provider: str = "unknown") -> Tuple[Optional[Mapping[str, Any]], Mapping[str, Any]]:
    """Return ``(choice, delta)`` for the first choice; ``(None, {})`` when there is none.

    Raises:
        MalformedChunkError: ``choices`` is not a list, or the first choice
            or its delta is not an object.
    """
    choices = data.get("choices") or []
    if not isinstance(choices, list):
        raise MalformedChunkError(message=f"choices is not a list: {type(choices).__name__}", provider=provider)
    if not choices:
        return None, {}
    choice = choices[0] or {}
    if not isinstance(choice, Mapping):
        raise MalformedChunkError(message=f"choice is not an object: {type(choice).__name__}", provider=provider)
    delta = choice.get("delta") or choice.get("message") or {}
    if not isinstance(delta, Mapping):
        raise MalformedChunkError(message=f"delta is not an object: {type(delta).__name__}", provider=provider)
    return choice, delta


def base_delta(data: Mapping[str, Any], delta: Mapping[str, Any]) -> CanonicalDelta:
    """Fill the convention-independent fields of a canonical delta."""
    return CanonicalDelta(
        content=delta.get("content") or "",
        reasoning=delta.get("reasoning_content") or delta.get("reasoning") or "",
        usage=data.get("usage") if isinstance(data.get("usage"), dict) else None,
        response_id=data.get("id") if isinstance(data.get("id"), str) else None,
    )


class MultiCallNormalizer:
    """Normalizer for OpenAI-compatible chunks (``tool_calls`` arrays)."""

    convention = CallConvention.MULTI_CALL

    def __init__(self, provider: str = "openai") -> None:
        self.provider = provider

    def normalize(self, payload: str) -> CanonicalDelta:
        data = decode_chunk(payload, self.provider)
        choice, delta = first_choice(data, self.provider)
        out = base_delta(data, delta)
        if choice is None:
            return out
        out.finish_reason = choice.get("finish_reason")
        out.is_end = out.finish_reason is not None
        raw_calls = delta.get("tool_calls") or []
        try:
            out.tool_calls = [ToolCallFragment.from_wire(c) for c in raw_calls]
        except TypeError as exc:
            raise MalformedChunkError(message=str(exc), provider=self.provider, chunk=payload[:_CHUNK_EXCERPT]) from exc
        return out


_NORMALIZERS: Dict[CallConvention, Tuple[str, str]] = {
    CallConvention.MULTI_CALL: ("gigachat_providers.base.streaming.normalizers", "MultiCallNormalizer"),
    CallConvention.SINGLE_CALL: ("gigachat_providers.gigachat.stream_helpers", "SingleCallNormalizer"),
}


def normalizer_for(convention: CallConvention | str, **kwargs: Any) -> DeltaNormalizer:
    """Return a new normalizer instance for ``convention``.

    Raises:
        ValueError: unknown convention name.
    """
    key = CallConvention(convention)
    module_name, class_name = _NORMALIZERS[key]
    cls = getattr(import_module(module_name), class_name)
    return cls(**kwargs)


__all__ = [
    "CallConvention",
    "DeltaNormalizer",
    "MultiCallNormalizer",
    "normalizer_for",
    "decode_chunk",
    "provider_error_from_object",
    "first_choice",
    "base_delta",
]
