"""Credential session for the GigaChat identity endpoint.

Holds the bearer token of one provider instance. The token is obtained
lazily through a client-credentials exchange on the first request and then
reused for the life of the session; there is no expiry tracking, refresh or
retry. ``ensure_token`` is the single mutation point and is guarded by a lock
with a double-checked cache, so concurrent first requests trigger at most one
exchange.
"""
from __future__ import annotations

import base64
import logging
import threading
import time
from typing import Optional

import httpx
from pydantic import ValidationError

from ..base.constants import FORM_MEDIA_TYPE, JSON_MEDIA_TYPE, RQUID_HEADER
from ..base.dto import AccessTokenDTO
from ..base.errors import AuthenticationError
from ..base.http import VerifyType, get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.timeouts import httpx_timeout
from ..config.defaults import GIGACHAT_DEFAULT_AUTH_URL, GIGACHAT_DEFAULT_SCOPE
from .nonce import new_nonce

_REASON_EXCERPT = 500


def basic_credentials(client_id: str, client_secret: str) -> str:
    """Return the ``Basic`` authorization value for a client id/secret pair."""
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


class CredentialSession:
    """Bearer token holder plus the client-credentials exchange.

    Parameters:
        client_id: Client identifier issued for the account.
        client_secret: Client secret issued for the account.
        scope: API scope (``GIGACHAT_API_PERS`` for personal accounts).
        auth_url: Identity endpoint URL.
        verify: TLS verification flag or CA bundle path.
        client: Optional ``httpx.Client``; defaults to the pooled auth client.

    The session is never persisted; credentials live in memory only.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        scope: str = GIGACHAT_DEFAULT_SCOPE,
        auth_url: str = GIGACHAT_DEFAULT_AUTH_URL,
        *,
        verify: VerifyType = True,
        client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.client_id = client_id
        self._client_secret = client_secret
        self.scope = scope
        self.auth_url = auth_url
        self._verify = verify
        self._client = client
        self._logger = logger or get_logger("gigachat.auth")
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        self.expires_at: Optional[int] = None
        self.exchanges = 0

    def __repr__(self) -> str:
        return f"CredentialSession(client_id={self.client_id!r}, scope={self.scope!r}, has_token={self.has_token})"

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def has_token(self) -> bool:
        return self._token is not None

    def ensure_token(self) -> str:
        """Return the cached token, performing the exchange when none is held.

        Raises:
            AuthenticationError: the identity endpoint rejected the
                credentials, answered without a token, or was unreachable.
        """
        token = self._token
        if token is not None:
            return token
        with self._lock:
            if self._token is None:
                self._exchange()
            return self._token  # type: ignore[return-value]

    def invalidate(self) -> None:
        """Drop the cached token; the next ``ensure_token`` exchanges again."""
        with self._lock:
            self._token = None
            self.expires_at = None

    # ---- internals ----
    def _http(self) -> httpx.Client:
        return self._client or get_httpx_client(None, "gigachat.auth", verify=self._verify)

    def _exchange(self) -> None:
        rquid = new_nonce()
        ctx = LogContext(provider="gigachat", request_id=rquid, extra={"scope": self.scope})
        headers = {
            "Authorization": basic_credentials(self.client_id, self._client_secret),
            RQUID_HEADER: rquid,
            "Content-Type": FORM_MEDIA_TYPE,
            "Accept": JSON_MEDIA_TYPE,
        }
        normalized_log_event(self._logger, "auth.start", ctx, phase="start", attempt=1)
        t0 = time.perf_counter()
        self.exchanges += 1
        try:
            resp = self._http().post(
                self.auth_url,
                headers=headers,
                data={"scope": self.scope},
                timeout=httpx_timeout(),
            )
        except httpx.HTTPError as e:
            raise self._fail(ctx, AuthenticationError(message=f"identity endpoint unreachable: {e}", raw=e)) from e

        if not resp.is_success:
            reason = (resp.text or resp.reason_phrase or "")[:_REASON_EXCERPT]
            raise self._fail(
                ctx,
                AuthenticationError(
                    message=f"identity endpoint returned {resp.status_code}",
                    status=resp.status_code,
                    reason=reason,
                ),
            )

        try:
            dto = AccessTokenDTO.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise self._fail(
                ctx,
                AuthenticationError(
                    message="identity response carries no access_token",
                    status=resp.status_code,
                    reason=resp.text[:_REASON_EXCERPT],
                    raw=e,
                ),
            ) from e

        self._token = dto.access_token
        self.expires_at = dto.expires_at
        normalized_log_event(
            self._logger,
            "auth.end",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=True,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
            expires_at=dto.expires_at,
        )

    def _fail(self, ctx: LogContext, err: AuthenticationError) -> AuthenticationError:
        normalized_log_event(
            self._logger,
            "auth.error",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=False,
            error_code=err.code.value,
            status=err.status,
            error=err.message,
            level=logging.WARNING,
        )
        return err


__all__ = ["CredentialSession", "basic_credentials"]
