"""Common helpers for the GigaChat provider.

Purpose:
    Request building shared by the chat, streaming and upload paths: URL and
    header construction (bearer token, per-request ``RqUID``, session id),
    the outbound body, and mapping of HTTP failures to ``ProviderError``.

Notes:
    These helpers assume the consumer is an instance that provides attributes:
    ``_base_url`` (str), ``_verify`` (bool|str), ``_http_client``
    (httpx.Client|None), ``_system_message`` (str|None) and ``provider_name``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx

from ..base.constants import JSON_MEDIA_TYPE, RQUID_HEADER, SESSION_ID_HEADER
from ..base.errors import ErrorCode, ProviderError, classify_exception, code_for_status
from ..base.http import get_httpx_client
from ..base.models import ChatRequest
from .payload import build_payload

_ERROR_EXCERPT = 500
_RETRYABLE = (ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.UNAVAILABLE)


def error_message_from_body(resp: httpx.Response) -> str:
    """Extract the provider's own error message from a failed response."""
    text = resp.text or ""
    try:
        data = json.loads(text) if text else None
    except ValueError:
        data = None
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if data.get("message"):
            return str(data["message"])
        if isinstance(err, str) and err:
            return err
    return (text or resp.reason_phrase or f"HTTP {resp.status_code}")[:_ERROR_EXCERPT]


class GigaChatCommonMixin:
    """Mixin offering shared URL, header and payload builders for GigaChat."""

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _http(self) -> httpx.Client:
        """Return the injected client or the pooled API client."""
        client: Optional[httpx.Client] = getattr(self, "_http_client", None)
        return client or get_httpx_client(None, "gigachat.api", verify=self._verify)

    def _build_headers(self, token: str, rquid: str, session_id: Optional[str] = None) -> Dict[str, str]:
        """Build completion headers.

        Parameters:
            token: Bearer token from the credential session.
            rquid: Fresh request nonce for this attempt.
            session_id: Conversation id, sent as ``X-Session-ID`` when known.
        """
        headers = {
            "Authorization": f"Bearer {token}",
            RQUID_HEADER: rquid,
            "Content-Type": JSON_MEDIA_TYPE,
            "Accept": JSON_MEDIA_TYPE,
        }
        if session_id:
            headers[SESSION_ID_HEADER] = session_id
        return headers

    def _build_body(self, request: ChatRequest, model: str, *, stream: bool) -> Dict[str, Any]:
        """Assemble the GigaChat JSON body for ``request``.

        The configured system message is prepended only when the history has
        no system turn of its own.
        """
        canonical = request.to_payload(model, stream=stream)
        sys_msg = getattr(self, "_system_message", None)
        if sys_msg and not any(m.get("role") == "system" for m in canonical["messages"]):
            canonical["messages"] = [{"role": "system", "content": sys_msg}] + canonical["messages"]
        return build_payload(canonical)

    def _status_error(self, resp: httpx.Response, model: Optional[str]) -> ProviderError:
        """Map a non-2xx response to a ``ProviderError`` with the provider's message."""
        code = code_for_status(resp.status_code)
        return ProviderError(
            code=code,
            message=error_message_from_body(resp),
            provider=self.provider_name,
            model=model,
            retryable=code in _RETRYABLE,
        )

    def _transport_error(self, exc: Exception, model: Optional[str]) -> ProviderError:
        """Wrap a transport exception into a classified ``ProviderError``."""
        code = classify_exception(exc)
        return ProviderError(
            code=code,
            message=str(exc) or type(exc).__name__,
            provider=self.provider_name,
            model=model,
            retryable=code in _RETRYABLE,
            raw=exc,
        )


__all__ = ["GigaChatCommonMixin", "error_message_from_body"]
