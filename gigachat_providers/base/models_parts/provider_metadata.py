"""
Provider call metadata model.

Diagnostic metadata attached to every `ChatResponse`: HTTP status, the
``RqUID`` of the request, latency, token usage and, on failure, the error
text and code under ``extra``.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional


@dataclass
class ProviderMetadata:
    """Execution metadata for a provider call.

    Attributes:
        provider_name: Canonical provider key (``"gigachat"``).
        model_name: Resolved model name used for the call.
        http_status: HTTP status code of the completion response, if any.
        request_id: ``RqUID`` nonce sent with the request.
        response_id: Provider response identifier when available.
        latency_ms: End-to-end latency for the operation, in milliseconds.
        finish_reason: Provider finish reason of the first choice.
        usage: Token usage mapping (``prompt``/``completion``/``total``).
        extra: JSON-serializable map; holds ``error`` and ``code`` on failure.
    """

    provider_name: str
    model_name: str
    http_status: Optional[int] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    latency_ms: Optional[float] = None
    finish_reason: Optional[str] = None
    usage: Optional[Dict[str, Optional[int]]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "ProviderMetadata",
]
