"""GigaChat provider adapter.

Summary:
- Non-stream chat via ``httpx`` with centralized timeouts and retry on start
- Streaming via ``BaseStreamingAdapter`` with the single-call normalizer
- File upload for message ``attachments``

Authentication:
- A :class:`CredentialSession` exchanges client credentials for a bearer
  token on the first request and keeps it for the life of the instance.
  There is no expiry tracking or refresh; a 401 from the API surfaces as an
  ``auth`` error.

Errors & Observability:
- ``chat()`` never raises for provider failures: ``meta.extra`` carries
  ``error`` and ``code``
- ``stream_chat()`` ends every run with exactly one terminal event;
  failures are reported there as ``"<code>:<message>"``
- Structured ``chat.*``, ``stream.*`` and ``files.upload.*`` events

This module orchestrates I/O only; protocol translation lives in
``payload``, ``history`` and ``stream_helpers``.
"""

from __future__ import annotations

import logging
import mimetypes
import os
from typing import Any, BinaryIO, Dict, Iterator, Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from ..base.cancellation import CancellationToken
from ..base.constants import JSON_MEDIA_TYPE, MISSING_CREDENTIALS_ERROR, RQUID_HEADER
from ..base.dto import UploadedFileDTO
from ..base.errors import ErrorCode, ProviderError
from ..base.interfaces import HasDefaultModel, LLMProvider, SupportsFileUpload, SupportsStreaming
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatRequest, ChatResponse, ProviderMetadata
from ..base.resilience.retry import RetryConfig
from ..base.streaming import BaseStreamingAdapter, CallConvention, ChatStreamEvent, ResponseLines, normalizer_for
from ..base.streaming.streaming_adapter_helpers import format_error
from ..base.timeouts import httpx_timeout
from ..config import get_provider_config
from ..config.defaults import (
    GIGACHAT_DEFAULT_AUTH_URL,
    GIGACHAT_DEFAULT_BASE_URL,
    GIGACHAT_DEFAULT_MODEL,
    GIGACHAT_DEFAULT_SCOPE,
    GIGACHAT_FILE_PURPOSE,
)
from .auth import CredentialSession
from .chat_helpers import GigaChatChatMixin
from .helpers import GigaChatCommonMixin
from .nonce import new_nonce
from .stream_helpers import GigaChatStreamingMixin

FileInput = Union[str, bytes, BinaryIO]


class GigaChatProvider(
    GigaChatCommonMixin,
    GigaChatChatMixin,
    GigaChatStreamingMixin,
    LLMProvider,
    SupportsStreaming,
    SupportsFileUpload,
    HasDefaultModel,
):
    """GigaChat LLM provider implementation.

    Parameters:
        client_id: Client id override; resolved from config when omitted
            (``GIGACHAT_CLIENT_ID``, falling back to ``GIGACHAT_API_KEY``).
        client_secret: Client secret override (``GIGACHAT_CLIENT_SECRET``).
        model: Default model name (``GigaChat`` unless configured).
        base_url: API base URL.
        auth_url: Identity endpoint URL.
        scope: Token scope.
        verify_ssl: TLS verification flag or CA bundle path.
        session: Pre-built credential session; shared tokens across
            providers are possible by passing the same session.
        http_client: Client used for every request, including the identity
            exchange when the session is built here (tests inject a
            ``MockTransport``-backed client).
        retry_config: Start-phase retry policy override.

    Side effects:
        - Reads provider-level configuration via ``get_provider_config("gigachat")``.
        - Initializes a structured provider logger.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        auth_url: Optional[str] = None,
        scope: Optional[str] = None,
        verify_ssl: Optional[Union[bool, str]] = None,
        *,
        session: Optional[CredentialSession] = None,
        http_client: Optional[httpx.Client] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        cfg = get_provider_config(
            "gigachat",
            {
                "client_id": client_id,
                "client_secret": client_secret,
                "model": model,
                "base_url": base_url,
                "auth_url": auth_url,
                "scope": scope,
                "verify_ssl": verify_ssl,
            },
        )
        self._model = cfg.get("model") or GIGACHAT_DEFAULT_MODEL
        self._base_url = str(cfg.get("base_url") or GIGACHAT_DEFAULT_BASE_URL).rstrip("/")
        self._verify = cfg.get("verify_ssl", True)
        self._system_message = cfg.get("system_message")
        self._http_client = http_client
        self._retry_config = retry_config
        self._logger = get_logger("gigachat.provider")
        if session is None and cfg.get("client_id") and cfg.get("client_secret"):
            session = CredentialSession(
                cfg["client_id"],
                cfg["client_secret"],
                scope=cfg.get("scope") or GIGACHAT_DEFAULT_SCOPE,
                auth_url=cfg.get("auth_url") or GIGACHAT_DEFAULT_AUTH_URL,
                verify=self._verify,
                client=http_client,
            )
        self._session = session

    @property
    def provider_name(self) -> str:
        return "gigachat"

    @property
    def session(self) -> Optional[CredentialSession]:
        return self._session

    def default_model(self) -> Optional[str]:
        return self._model

    def supports_streaming(self) -> bool:
        return True

    # ---- Chat ----
    def chat(self, request: ChatRequest) -> ChatResponse:
        """Perform a non-streaming chat completion.

        Parameters:
            request: The canonical chat request.

        Returns:
            A ``ChatResponse`` with text, tool calls (at most one) and the
            continuation token on success. On failure ``text`` is ``None``
            and ``meta.extra`` holds ``error`` and ``code``.

        Timeout/Retry:
            - Read/connect limits from ``httpx_timeout()``.
            - The POST is retried on ``transient``, ``rate_limit`` and
              ``unavailable`` with a fresh ``RqUID`` per attempt; the identity
              exchange is never retried.
        """
        model = request.model or self._model
        ctx = LogContext(provider=self.provider_name, model=model, session_id=request.session_id)
        if self._session is None:
            return self._err_no_credentials(model, ctx)

        self._log_chat_start(ctx, request)
        try:
            payload = self._build_body(request, model, stream=False)
            data, status, latency_ms = self._execute_chat(payload, request.session_id, model, ctx)
        except ProviderError as e:
            return self._provider_error_response(e, model, ctx)
        except Exception as e:  # noqa: BLE001 - chat() reports, never raises
            return self._generic_error_response(e, model, ctx)
        return self._build_chat_response(data, model, ctx, status, latency_ms)

    # ---- Streaming ----
    def stream_chat(
        self,
        request: ChatRequest,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[ChatStreamEvent]:
        """Stream a chat completion through ``BaseStreamingAdapter``.

        Parameters:
            request: The canonical chat request.
            cancellation_token: Optional token; checked before every chunk and
                closes the HTTP response when cancelled.

        Yields:
            One ``ChatStreamEvent`` per non-empty chunk, then exactly one
            terminal event. Authentication, start, provider-error and
            malformed-chunk failures end the stream with
            ``error="<code>:<message>"``.
        """
        model = request.model or self._model
        ctx = LogContext(provider=self.provider_name, model=model, session_id=request.session_id)
        self._log_stream_start(ctx, request)
        if self._session is None:
            yield from self._stream_fail(ctx, model, format_error(ErrorCode.AUTH, MISSING_CREDENTIALS_ERROR))
            return

        try:
            payload = self._build_body(request, model, stream=True)
        except ProviderError as e:
            yield from self._stream_fail(ctx, model, format_error(e.code, e.message))
            return
        except (TypeError, ValueError) as e:
            yield from self._stream_fail(ctx, model, format_error(ErrorCode.VALIDATION, str(e)))
            return

        def _starter() -> Dict[str, Any]:
            return self._open_stream(payload, request.session_id, model, ctx)

        adapter = BaseStreamingAdapter(
            ctx=ctx,
            provider_name=self.provider_name,
            model=model,
            starter=_starter,
            normalizer=normalizer_for(CallConvention.SINGLE_CALL, provider=self.provider_name),
            retry_config_factory=self._default_retry_config,
            logger=self._logger,
            cancellation_token=cancellation_token,
        )
        yield from adapter.run()

    def _open_stream(self, payload: Dict[str, Any], session_id: Optional[str], model: str, ctx: LogContext) -> Dict[str, Any]:
        """Send the streamed completion request and check its status.

        The response is opened eagerly so connection and status failures
        happen inside the retried start phase. On a non-2xx status the body
        is read for the provider's message and the response closed.
        """
        token = self._session.ensure_token()
        rquid = new_nonce()
        ctx.request_id = rquid
        client = self._http()
        request = client.build_request(
            "POST",
            self._url("/chat/completions"),
            json=payload,
            headers=self._build_headers(token, rquid, session_id),
            timeout=httpx_timeout(stream=True),
        )
        try:
            resp = client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise self._transport_error(e, model) from e
        if not resp.is_success:
            try:
                resp.read()
            finally:
                resp.close()
            raise self._status_error(resp, model)
        return {"stream": ResponseLines(resp), "request_id": rquid}

    # ---- Files ----
    def upload_file(
        self,
        file: FileInput,
        *,
        filename: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> str:
        """Upload a file for use as a message attachment.

        Parameters:
            file: A filesystem path, raw bytes or a binary file object.
            filename: Name sent to the provider; derived from the path or
                file object when omitted.
            mime_type: Content type; guessed from the name when omitted.

        Returns:
            The provider file id, to be listed in ``Message.attachments``.

        Raises:
            ProviderError: missing credentials, authentication, transport or
                HTTP failure, or a response without an ``id``.
        """
        ctx = LogContext(provider=self.provider_name)
        if self._session is None:
            raise ProviderError(code=ErrorCode.AUTH, message=MISSING_CREDENTIALS_ERROR, provider=self.provider_name)
        name, content = _read_file(file, filename)
        content_type = mime_type or mimetypes.guess_type(name)[0] or "application/octet-stream"
        try:
            token = self._session.ensure_token()
            rquid = new_nonce()
            ctx.request_id = rquid
            file_id = self._post_file(token, rquid, name, content, content_type)
        except ProviderError as e:
            normalized_log_event(
                self._logger,
                "files.upload.error",
                ctx,
                phase="finalize",
                emitted=False,
                error_code=e.code.value,
                error=e.message,
                filename=name,
                level=logging.WARNING,
            )
            raise
        normalized_log_event(
            self._logger,
            "files.upload.end",
            ctx,
            phase="finalize",
            emitted=True,
            filename=name,
            bytes=len(content),
            file_id=file_id,
        )
        return file_id

    def _post_file(self, token: str, rquid: str, name: str, content: bytes, content_type: str) -> str:
        headers = {"Authorization": f"Bearer {token}", RQUID_HEADER: rquid, "Accept": JSON_MEDIA_TYPE}
        try:
            resp = self._http().post(
                self._url("/files"),
                headers=headers,
                files={"file": (name, content, content_type)},
                data={"purpose": GIGACHAT_FILE_PURPOSE},
                timeout=httpx_timeout(),
            )
        except httpx.HTTPError as e:
            raise self._transport_error(e, None) from e
        if not resp.is_success:
            raise self._status_error(resp, None)
        try:
            return UploadedFileDTO.model_validate(resp.json()).id
        except (ValueError, ValidationError) as e:
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message="upload response carries no file id",
                provider=self.provider_name,
                raw=e,
            ) from e

    # ---- Internal helpers ----
    def _log_chat_start(self, ctx: LogContext, request: ChatRequest) -> None:
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=None,
            tokens=None,
            messages=len(request.messages),
            has_tools=bool(request.tools),
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )

    def _log_stream_start(self, ctx: LogContext, request: ChatRequest) -> None:
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=None,
            tokens=None,
            messages=len(request.messages),
            has_tools=bool(request.tools),
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )

    def _stream_fail(self, ctx: LogContext, model: str, error: str) -> Iterator[ChatStreamEvent]:
        """Emit a start-phase stream error and yield the terminal event."""
        normalized_log_event(
            self._logger,
            "stream.adapter.error",
            ctx,
            phase="start",
            attempt=None,
            emitted=False,
            tokens=None,
            error=error,
            error_code=error.split(":", 1)[0],
            level=logging.WARNING,
        )
        yield ChatStreamEvent(provider=self.provider_name, model=model, delta=None, finish=True, error=error)

    def _err_no_credentials(self, model: str, ctx: LogContext) -> ChatResponse:
        normalized_log_event(
            self._logger,
            "chat.error",
            ctx,
            phase="start",
            emitted=False,
            error=MISSING_CREDENTIALS_ERROR,
            error_code=ErrorCode.AUTH.value,
            level=logging.WARNING,
        )
        meta = ProviderMetadata(
            provider_name=self.provider_name,
            model_name=model,
            extra={"error": MISSING_CREDENTIALS_ERROR, "code": ErrorCode.AUTH.value},
        )
        return ChatResponse(text=None, parts=None, raw=None, meta=meta)


def _read_file(file: FileInput, filename: Optional[str]) -> Tuple[str, bytes]:
    """Return ``(name, content)`` for a path, bytes or binary file object."""
    if isinstance(file, (bytes, bytearray)):
        return filename or "upload.bin", bytes(file)
    if isinstance(file, (str, os.PathLike)):
        with open(file, "rb") as fh:
            return filename or os.path.basename(os.fspath(file)), fh.read()
    content = file.read()
    name = filename or os.path.basename(str(getattr(file, "name", "") or "")) or "upload.bin"
    return name, content


__all__ = ["GigaChatProvider"]
