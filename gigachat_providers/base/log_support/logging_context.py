"""Structured logging context object.

:class:`LogContext` carries the fields shared by every event of one request
(provider, model, request/response ids, session id) so call sites only pass
what is specific to the event itself.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for provider logging events.

    ``request_id`` holds the ``RqUID`` nonce of the outbound request and
    ``session_id`` the ``X-Session-ID`` conversation id when one is known.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    session_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
