"""
Identity exchange failure.

Raised by the credential session when the client-credentials exchange returns
a non-2xx status, a body without ``access_token``, or fails at the transport
level. Never retried by the session itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class AuthenticationError(ProviderError):
    """Failed token acquisition.

    Attributes:
        status: HTTP status of the identity endpoint response, ``None`` for
            transport failures.
        reason: Status text or response body excerpt returned by the endpoint.
    """

    code: ErrorCode = ErrorCode.AUTH
    message: str = "authentication failed"
    provider: str = "gigachat"
    status: Optional[int] = None
    reason: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        status = self.status if self.status is not None else "-"
        return f"{self.provider} {self.code.value}: {self.message} (status={status})"


__all__ = ["AuthenticationError"]
