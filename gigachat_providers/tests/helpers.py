"""Offline GigaChat API double for provider tests.

:class:`FakeGigaChat` is a ``httpx.MockTransport`` handler that answers the
identity, completion and file endpoints from canned data and records every
request it receives.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from gigachat_providers.base.resilience import RetryConfig
from gigachat_providers.gigachat import GigaChatProvider

AUTH_URL = "https://auth.test/api/v2/oauth"
BASE_URL = "https://api.test/api/v1"

FAST_RETRY = RetryConfig(max_attempts=3, max_delay=0.0)


def sse_body(*chunks: Dict[str, Any], done: bool = True) -> bytes:
    """Render chunk objects as an SSE body terminated by ``[DONE]``."""
    lines = [f"data: {json.dumps(c, ensure_ascii=False)}\n\n" for c in chunks]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def delta_chunk(delta: Dict[str, Any], finish_reason: Optional[str] = None, **top: Any) -> Dict[str, Any]:
    """Build one streamed completion chunk."""
    return {"choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}], **top}


@dataclass
class FakeGigaChat:
    """Canned responses for the three GigaChat endpoints.

    Attributes:
        token: Access token handed out by the identity endpoint.
        auth_status: Identity endpoint status (non-2xx simulates rejection).
        chunks: Chunks streamed by the completion endpoint.
        raw_stream: Verbatim stream body, used instead of ``chunks`` when set.
        completion: JSON body for non-streamed completions.
        chat_statuses: Statuses returned by successive completion calls
            before the canned success (e.g. ``[503, 503]``).
        file_id: Id returned by the file endpoint.
        requests: Every request received, in order.
    """

    token: str = "tok-abc"
    auth_status: int = 200
    chunks: List[Dict[str, Any]] = field(default_factory=list)
    completion: Dict[str, Any] = field(default_factory=dict)
    chat_statuses: List[int] = field(default_factory=list)
    raw_stream: Optional[bytes] = None
    file_id: str = "file-1"
    requests: List[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url == AUTH_URL:
            if self.auth_status >= 400:
                return httpx.Response(self.auth_status, text="invalid credentials")
            return httpx.Response(200, json={"access_token": self.token, "expires_at": 1893456000000})
        if url.endswith("/chat/completions"):
            if self.chat_statuses:
                status = self.chat_statuses.pop(0)
                return httpx.Response(status, json={"status": status, "message": f"upstream said {status}"})
            body = json.loads(request.content)
            if body.get("stream"):
                content = self.raw_stream if self.raw_stream is not None else sse_body(*self.chunks)
                return httpx.Response(200, content=content, headers={"content-type": "text/event-stream"})
            return httpx.Response(200, json=self.completion)
        if url.endswith("/files"):
            return httpx.Response(
                200,
                json={"id": self.file_id, "object": "file", "bytes": 3, "filename": "a.txt", "purpose": "general"},
            )
        return httpx.Response(404, json={"message": "no route"})

    def of(self, suffix: str) -> List[httpx.Request]:
        """Requests whose URL ends with ``suffix``."""
        return [r for r in self.requests if str(r.url).endswith(suffix)]

    def bodies(self, suffix: str = "/chat/completions") -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.of(suffix)]


def make_provider(fake: FakeGigaChat, **kwargs: Any) -> GigaChatProvider:
    """Provider wired to ``fake`` through a ``MockTransport`` client."""
    client = httpx.Client(transport=httpx.MockTransport(fake))
    params: Dict[str, Any] = {
        "client_id": "client-id",
        "client_secret": "client-secret",
        "base_url": BASE_URL,
        "auth_url": AUTH_URL,
        "http_client": client,
        "retry_config": FAST_RETRY,
    }
    params.update(kwargs)
    return GigaChatProvider(**params)
