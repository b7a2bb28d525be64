"""Base streaming adapter: drives one provider stream to completion.

The adapter owns the streaming lifecycle so providers only supply a
``starter`` (opens the HTTP stream, returns an iterable of raw lines) and a
:class:`DeltaNormalizer` for their chunk format. It guarantees:

* the start phase is retried per the supplied retry policy;
* lines are processed sequentially, each normalized exactly once;
* cancellation is checked before every line and closes the native stream;
* exactly one terminal event ends every run, successful or not.
"""
from __future__ import annotations

import time
from contextlib import ExitStack
from typing import Callable, Iterable, Iterator, Optional

from .streaming import ChatStreamEvent
from .normalizers import DeltaNormalizer
from .streaming_metrics import StreamMetrics
from ..logging import LogContext
from ..resilience.retry import RetryConfig
from ..cancellation import CancellationToken, CancelledError
from .streaming_adapter_helpers import (
    attempt_start,
    finalize_success,
    handle_cancellation,
    handle_midstream_error,
    is_done_line,
    process_line,
    register_stream_cleanup,
)


class BaseStreamingAdapter:
    """Encapsulates the provider streaming loop."""

    def __init__(
        self,
        *,
        ctx: LogContext,
        provider_name: str,
        model: str,
        starter: Callable[[], Iterable],
        normalizer: DeltaNormalizer,
        retry_config_factory: Callable[[str], RetryConfig],
        logger,
        on_complete: Optional[Callable[[bool], None]] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        self.ctx = ctx
        self.provider_name = provider_name
        self.model = model
        self._starter = starter
        self._normalizer = normalizer
        self._retry_config_factory = retry_config_factory
        self._logger = logger
        self._on_complete = on_complete
        self._cancellation_token = cancellation_token
        self.metrics = StreamMetrics()

    def _check_cancelled(self) -> None:
        if self._cancellation_token is not None:
            self._cancellation_token.raise_if_cancelled()

    def run(self) -> Iterator[ChatStreamEvent]:
        """Execute the streaming lifecycle, yielding delta events then one terminal event."""
        t0 = time.perf_counter()
        try:
            self._check_cancelled()
        except CancelledError as ce:
            yield from handle_cancellation(self, ce, t0)
            return

        stream, terminal_evt = attempt_start(self)
        if stream is None:
            if terminal_evt is not None:
                yield terminal_evt
            return

        with ExitStack() as stack:
            register_stream_cleanup(self, stream, stack)
            try:
                for line in stream:
                    self._check_cancelled()
                    if is_done_line(line):
                        break
                    yield from process_line(self, line, t0)
                self._check_cancelled()
            except CancelledError as ce:
                yield from handle_cancellation(self, ce, t0)
                return
            except Exception as e:
                # a cancel callback closing the response surfaces as a read error
                if self._cancellation_token is not None and self._cancellation_token.cancelled:
                    yield from handle_cancellation(self, CancelledError(self._cancellation_token.reason or "operation cancelled"), t0)
                    return
                yield from handle_midstream_error(self, e, t0)
                return
        yield from finalize_success(self, t0)


__all__ = ["BaseStreamingAdapter"]
