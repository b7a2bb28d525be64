"""Chat helpers for the GigaChat provider.

Encapsulates non-streaming chat orchestration (POST with retry on the start
phase, response decoding) and error response construction so the main
provider module stays focused on wiring.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from ..base.errors import ErrorCode, ProviderError, classify_exception
from ..base.logging import LogContext, normalized_log_event
from ..base.models import ChatResponse, ContentPart, ProviderMetadata, ToolCall
from ..base.resilience.retry import retry
from ..base.streaming.streaming_metrics import build_token_usage
from ..base.timeouts import httpx_timeout
from .nonce import new_nonce
from .stream_helpers import arguments_text, new_tool_call_id


def usage_from(data: Mapping[str, Any]) -> Optional[Dict[str, Optional[int]]]:
    """Return the canonical usage mapping of a completion body, if present."""
    usage = data.get("usage")
    if not isinstance(usage, Mapping):
        return None
    return build_token_usage(usage.get("prompt_tokens"), usage.get("completion_tokens"), usage.get("total_tokens"))


def tool_calls_from(message: Mapping[str, Any]) -> Optional[List[ToolCall]]:
    """Convert a provider ``function_call`` into the canonical one-call list."""
    fc = message.get("function_call")
    if not isinstance(fc, Mapping) or not fc.get("name"):
        return None
    return [ToolCall(id=new_tool_call_id(), name=str(fc["name"]), arguments=arguments_text(fc.get("arguments")))]


class GigaChatChatMixin:
    """Mixin providing chat execution and response building."""

    def _execute_chat(
        self,
        payload: Dict[str, Any],
        session_id: Optional[str],
        model: str,
        ctx: LogContext,
    ) -> Tuple[Dict[str, Any], int, float]:
        """POST the completion under the retry policy.

        Each attempt obtains the token (cached after the first exchange) and
        a fresh ``RqUID``. Returns ``(body, http_status, latency_ms)``.
        """
        t0 = time.perf_counter()
        resp = retry(self._default_retry_config("chat.start"))(self._make_chat_call(payload, session_id, model, ctx))()
        latency_ms = (time.perf_counter() - t0) * 1000.0
        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message=f"completion body is not JSON: {e}",
                provider=self.provider_name,
                model=model,
                raw=e,
            ) from e
        if not isinstance(data, dict):
            raise ProviderError(code=ErrorCode.VALIDATION, message="completion body is not an object", provider=self.provider_name, model=model)
        return data, resp.status_code, latency_ms

    def _make_chat_call(self, payload: Dict[str, Any], session_id: Optional[str], model: str, ctx: LogContext):
        """Return a callable performing one chat HTTP POST attempt."""

        def _invoke() -> httpx.Response:
            token = self._session.ensure_token()
            rquid = new_nonce()
            ctx.request_id = rquid
            try:
                resp = self._http().post(
                    self._url("/chat/completions"),
                    json=payload,
                    headers=self._build_headers(token, rquid, session_id),
                    timeout=httpx_timeout(),
                )
            except httpx.HTTPError as e:
                raise self._transport_error(e, model) from e
            if not resp.is_success:
                raise self._status_error(resp, model)
            return resp

        return _invoke

    def _build_chat_response(
        self,
        data: Dict[str, Any],
        model: str,
        ctx: LogContext,
        http_status: int,
        latency_ms: float,
    ) -> ChatResponse:
        """Decode ``choices[0].message`` into a ``ChatResponse``."""
        choices = data.get("choices") or []
        choice = choices[0] if choices and isinstance(choices[0], Mapping) else {}
        message = choice.get("message") or {}
        text = message.get("content")
        calls = tool_calls_from(message)
        token = message.get("functions_state_id") or data.get("functions_state_id")
        usage = usage_from(data)
        meta = ProviderMetadata(
            provider_name=self.provider_name,
            model_name=data.get("model") or model,
            http_status=http_status,
            request_id=ctx.request_id,
            response_id=data.get("id") if isinstance(data.get("id"), str) else None,
            latency_ms=latency_ms,
            finish_reason=choice.get("finish_reason"),
            usage=usage,
        )
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=True,
            tokens=usage,
            latency_ms=latency_ms,
            finish_reason=meta.finish_reason,
            tool_calls=len(calls or []),
        )
        parts = [ContentPart(type="text", text=text)] if text else None
        return ChatResponse(
            text=text or "",
            parts=parts,
            raw=data,
            meta=meta,
            reasoning=message.get("reasoning_content") or None,
            tool_calls=calls,
            continuation_token=token if isinstance(token, str) and token else None,
        )

    def _provider_error_response(self, e: ProviderError, model: str, ctx: LogContext) -> ChatResponse:
        """Build a normalized error response from a ``ProviderError``."""
        normalized_log_event(
            self._logger,
            "chat.error",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=False,
            tokens=None,
            error=e.message,
            error_code=e.code.value,
            level=logging.WARNING,
        )
        meta = ProviderMetadata(
            provider_name=self.provider_name,
            model_name=model,
            request_id=ctx.request_id,
            extra={"error": e.message, "code": e.code.value},
        )
        return ChatResponse(text=None, parts=None, raw=None, meta=meta)

    def _generic_error_response(self, e: Exception, model: str, ctx: LogContext) -> ChatResponse:
        """Build a normalized error response from an untyped exception."""
        code = classify_exception(e)
        return self._provider_error_response(
            ProviderError(code=code, message=str(e), provider=self.provider_name, model=model, raw=e),
            model,
            ctx,
        )


__all__ = ["GigaChatChatMixin", "usage_from", "tool_calls_from"]
