"""Terminal event creation with consolidated finalize logging."""
from __future__ import annotations

import logging
from typing import Optional

from .streaming import ChatStreamEvent
from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger,
    ctx: LogContext,
    provider: str,
    model: str,
    metrics: StreamMetrics,
    error: Optional[str] = None,
) -> ChatStreamEvent:
    """Create the terminal `ChatStreamEvent` and emit ``stream.adapter.end|error``."""
    error_code: Optional[str] = None
    if error and ":" in error:
        error_code = error.split(":", 1)[0].strip() or None

    normalized_log_event(
        logger,
        "stream.adapter.end" if error is None else "stream.adapter.error",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens(),
        error_code=error_code,
        emitted_count=metrics.emitted,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=error,
        level=logging.INFO if error is None else logging.WARNING,
    )
    return ChatStreamEvent(
        provider=provider,
        model=model,
        delta=None,
        finish=True,
        error=error,
    )


__all__ = ["finalize_stream"]
