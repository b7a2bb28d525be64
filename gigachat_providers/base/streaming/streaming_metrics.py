"""Streaming metrics data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass
class StreamMetrics:
    """Metrics collected for one stream.

    ``emitted`` counts delta events (the terminal event excluded); token
    fields are filled from the provider's ``usage`` object when it sends one.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    def tokens(self) -> Dict[str, Optional[int]]:
        return build_token_usage(self.prompt_tokens, self.completion_tokens, self.total_tokens)


def build_token_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> Dict[str, Optional[int]]:
    """Return a canonical token usage mapping; ``total`` is derived when omitted."""
    if total is None and prompt is not None and completion is not None:
        total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": total}


def apply_usage(metrics: StreamMetrics, usage: Optional[Mapping[str, Any]]) -> None:
    """Copy an OpenAI-style ``usage`` object onto ``metrics`` (ignores ``None``)."""
    if not usage:
        return
    prompt = usage.get("prompt_tokens")
    completion = usage.get("completion_tokens")
    tokens = build_token_usage(
        prompt if isinstance(prompt, int) else None,
        completion if isinstance(completion, int) else None,
        usage.get("total_tokens") if isinstance(usage.get("total_tokens"), int) else None,
    )
    metrics.prompt_tokens = tokens["prompt"]
    metrics.completion_tokens = tokens["completion"]
    metrics.total_tokens = tokens["total"]


__all__ = [
    "StreamMetrics",
    "build_token_usage",
    "apply_usage",
]
