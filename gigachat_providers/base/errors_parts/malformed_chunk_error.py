"""Unparsable stream chunk error."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class MalformedChunkError(ProviderError):
    """A stream payload that is not valid JSON.

    Attributes:
        chunk: The raw payload text (truncated by the caller for logging).
    """

    code: ErrorCode = ErrorCode.VALIDATION
    message: str = "malformed stream chunk"
    provider: str = "gigachat"
    chunk: str = ""


__all__ = ["MalformedChunkError"]
