"""Resilience helpers (retry policy)."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, logging_attempt_logger, retry

__all__ = ["DEFAULT_RETRY_CONFIG", "RetryConfig", "logging_attempt_logger", "retry"]
