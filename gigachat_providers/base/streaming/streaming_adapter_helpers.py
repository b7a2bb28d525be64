"""Streaming adapter helper functions.

Split out of :mod:`streaming_adapter` so each lifecycle step (start, chunk,
cancellation, mid-stream failure, success) can be read and tested alone.
Every helper takes the adapter as its first argument.
"""

from __future__ import annotations

import logging
import time
from contextlib import ExitStack
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from ..errors import ErrorCode, ProviderError, classify_exception
from ..logging import normalized_log_event
from ..resilience.retry import retry
from .canonical_delta import CanonicalDelta
from .sse import DONE, sse_payload
from .streaming import ChatStreamEvent
from .streaming_finalize import finalize_stream
from .streaming_metrics import apply_usage

_ERROR_EXCERPT = 260


def format_error(code: ErrorCode, message: str) -> str:
    """Render the terminal error string ``"<code>:<message>"``."""
    return f"{code.value}:{message[:_ERROR_EXCERPT]}"


def attempt_start(adapter) -> Tuple[Optional[Iterable], Optional[ChatStreamEvent]]:
    """Start the provider stream under the retry policy.

    Returns ``(stream, None)`` on success or ``(None, terminal_event)`` when
    the start phase failed for good.
    """
    try:
        result = start_with_retry(adapter)
        stream, extra_meta = coerce_stream_start_result(result)
    except ProviderError as e:
        return None, terminal_error(adapter, format_error(e.code, e.message))
    except Exception as e:  # unexpected starter failure, still reported as an event
        return None, terminal_error(adapter, format_error(classify_exception(e), str(e)))
    req_id = extra_meta.get("request_id")
    if req_id and not adapter.ctx.request_id:
        adapter.ctx.request_id = req_id
    return stream, None


def start_with_retry(adapter):
    """Invoke the adapter's starter, classifying failures into ``ProviderError``."""

    def _invoke():
        try:
            return adapter._starter()
        except ProviderError:
            raise
        except Exception as e:
            code = classify_exception(e)
            raise ProviderError(
                code=code,
                message=str(e),
                provider=adapter.provider_name,
                model=adapter.model,
                retryable=code in (ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT),
                raw=e,
            ) from e

    return retry(adapter._retry_config_factory("stream.start"))(_invoke)()


def coerce_stream_start_result(result) -> Tuple[Iterable, Dict[str, Any]]:
    """Normalize the starter's return value into ``(stream, meta)``.

    Accepted forms: a plain iterable, ``{"stream": iterable, **meta}``, or a
    ``(iterable, meta_mapping)`` pair.
    """
    if isinstance(result, Mapping):
        stream_obj = result.get("stream")
        if stream_obj is None:
            raise ProviderError(
                code=ErrorCode.INTERNAL,
                message="starter() mapping missing 'stream' key",
                provider="unknown",
            )
        return stream_obj, {k: v for k, v in result.items() if k != "stream"}
    if isinstance(result, tuple) and len(result) == 2 and isinstance(result[1], Mapping):
        return result[0], dict(result[1])
    return result, {}


def register_stream_cleanup(adapter, stream, stack: ExitStack) -> None:
    """Close the native stream on exit and when the cancellation token fires."""
    close_fn = getattr(stream, "close", None)
    if not callable(close_fn):
        return
    stack.callback(close_fn)
    token = adapter._cancellation_token
    if token is not None:
        stack.callback(token.on_cancel(close_fn))


def process_line(adapter, line, t0: float) -> Iterator[ChatStreamEvent]:
    """Frame, normalize and emit one raw stream line.

    Returns without yielding for blank/control lines and chunks that carry
    nothing actionable. Normalizer errors propagate to the run loop.
    """
    payload = sse_payload(line)
    if payload is None or payload == DONE:
        return
    delta: CanonicalDelta = adapter._normalizer.normalize(payload)
    apply_usage(adapter.metrics, delta.usage)
    if delta.response_id and not adapter.ctx.response_id:
        adapter.ctx.response_id = delta.response_id
    if delta.is_empty():
        return
    if adapter.metrics.time_to_first_token_ms is None:
        adapter.metrics.time_to_first_token_ms = (time.perf_counter() - t0) * 1000.0
    adapter.metrics.emitted += 1
    _log_delta_debug(adapter, delta)
    yield ChatStreamEvent(
        provider=adapter.provider_name,
        model=adapter.model,
        delta=delta.content or None,
        canonical=delta,
        raw=payload,
    )


def is_done_line(line) -> bool:
    """True for the ``data: [DONE]`` terminator."""
    return sse_payload(line) == DONE


def handle_midstream_error(adapter, exc: Exception, t0: float) -> Iterator[ChatStreamEvent]:
    """Map an exception raised while reading or normalizing to a terminal event."""
    adapter.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
    message = exc.message if isinstance(exc, ProviderError) else str(exc)
    yield terminal_error(adapter, format_error(classify_exception(exc), message))
    _notify_complete(adapter)


def handle_cancellation(adapter, exc, t0: float) -> Iterator[ChatStreamEvent]:
    """Map cooperative cancellation to a terminal ``cancelled`` event."""
    adapter.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
    reason = exc.args[0] if getattr(exc, "args", None) else "operation cancelled"
    yield terminal_error(adapter, format_error(ErrorCode.CANCELLED, str(reason)))
    _notify_complete(adapter)


def finalize_success(adapter, t0: float) -> Iterator[ChatStreamEvent]:
    """Emit the successful terminal event."""
    adapter.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
    yield finalize_stream(
        logger=adapter._logger,
        ctx=adapter.ctx,
        provider=adapter.provider_name,
        model=adapter.model,
        metrics=adapter.metrics,
    )
    _notify_complete(adapter)


def terminal_error(adapter, error: str) -> ChatStreamEvent:
    """Create a terminal error event with current metrics."""
    return finalize_stream(
        logger=adapter._logger,
        ctx=adapter.ctx,
        provider=adapter.provider_name,
        model=adapter.model,
        metrics=adapter.metrics,
        error=error,
    )


def _notify_complete(adapter) -> None:
    if adapter._on_complete is not None:
        adapter._on_complete(adapter.metrics.emitted > 0)


def _log_delta_debug(adapter, delta: CanonicalDelta) -> None:
    logger = adapter._logger
    if not logger.isEnabledFor(logging.DEBUG):
        return
    normalized_log_event(
        logger,
        "stream.delta",
        adapter.ctx,
        phase="mid_stream",
        emitted=True,
        delta_len=len(delta.content),
        reasoning_len=len(delta.reasoning),
        tool_fragments=len(delta.tool_calls),
        is_end=delta.is_end,
        level=logging.DEBUG,
    )


__all__ = [
    "format_error",
    "attempt_start",
    "start_with_retry",
    "coerce_stream_start_result",
    "register_stream_cleanup",
    "process_line",
    "is_done_line",
    "handle_midstream_error",
    "handle_cancellation",
    "finalize_success",
    "terminal_error",
]
