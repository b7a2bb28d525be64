"""Retry policy for start phases of provider calls.

Only calls that raise :class:`ProviderError` with a retryable code are
retried; everything else propagates on the first failure. The identity
exchange is not wrapped by this policy.
"""
from __future__ import annotations

import functools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, TypeVar

from ..errors import ErrorCode, ProviderError
from ..logging import LogContext, normalized_log_event

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """Retry policy parameters.

    Delays grow as ``delay_base ** attempt`` and are capped at ``max_delay``.
    """

    max_attempts: int = 3
    delay_base: float = 2.0
    max_delay: float = 10.0
    retryable_codes: tuple[ErrorCode, ...] = (
        ErrorCode.TRANSIENT,
        ErrorCode.RATE_LIMIT,
        ErrorCode.UNAVAILABLE,
    )
    attempt_logger: AttemptLogger | None = None

    def delays(self) -> Iterable[float]:
        for attempt in range(self.max_attempts - 1):
            yield min(self.delay_base**attempt, self.max_delay)


DEFAULT_RETRY_CONFIG = RetryConfig()


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Return a decorator applying the retry policy to a callable.

    The wrapped callable is invoked afresh on every attempt, so per-request
    values built inside it (such as the ``RqUID`` nonce) are regenerated.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            schedule = list(config.delays()) + [None]
            for attempt, delay in enumerate(schedule):
                try:
                    result = func(*args, **kwargs)
                except ProviderError as e:
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=config.max_attempts,
                            delay=delay,
                            error=e,
                        )
                    if e.code in config.retryable_codes and delay is not None:
                        time.sleep(delay)
                        continue
                    raise
                if config.attempt_logger:
                    config.attempt_logger(
                        attempt=attempt,
                        max_attempts=config.max_attempts,
                        delay=None,
                        error=None,
                    )
                return result
            raise RuntimeError("retry: schedule exhausted without a result")  # pragma: no cover

        return wrapper

    return decorator


def logging_attempt_logger(logger: logging.Logger, ctx: LogContext, phase: str) -> AttemptLogger:
    """Return an :class:`AttemptLogger` emitting ``retry.attempt`` events."""

    def _log(*, attempt: int, max_attempts: int, delay: float | None, error: ProviderError | None) -> None:
        normalized_log_event(
            logger,
            "retry.attempt",
            ctx,
            phase=phase,
            attempt=attempt + 1,
            error_code=error.code.value if error else None,
            emitted=None,
            tokens=None,
            max_attempts=max_attempts,
            delay_s=delay,
            level=logging.WARNING if error else logging.DEBUG,
        )

    return _log


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
    "logging_attempt_logger",
]
