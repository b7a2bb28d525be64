"""Mapping of statuses and exceptions onto the error taxonomy."""
from __future__ import annotations

import httpx
import pytest

from gigachat_providers.base.errors import (
    AuthenticationError,
    ErrorCode,
    ProviderError,
    classify_exception,
    code_for_status,
)


@pytest.mark.parametrize(
    "status,code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (413, ErrorCode.SERVER_ERROR),
        (422, ErrorCode.VALIDATION),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (502, ErrorCode.TRANSIENT),
        (503, ErrorCode.UNAVAILABLE),
        (504, ErrorCode.TIMEOUT),
        (None, ErrorCode.SERVER_ERROR),
    ],
)
def test_code_for_status(status, code):
    assert code_for_status(status) is code  # nosec B101


def test_transport_exceptions():
    req = httpx.Request("POST", "https://api.test/api/v1/chat/completions")
    assert classify_exception(httpx.ReadTimeout("slow", request=req)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused", request=req)) is ErrorCode.TRANSIENT  # nosec B101
    resp = httpx.Response(429, request=req)
    err = httpx.HTTPStatusError("too many", request=req, response=resp)
    assert classify_exception(err) is ErrorCode.RATE_LIMIT  # nosec B101


def test_provider_errors_pass_through_and_heuristics():
    assert classify_exception(AuthenticationError()) is ErrorCode.AUTH  # nosec B101
    pe = ProviderError(code=ErrorCode.CONFLICT, message="x", provider="gigachat")
    assert classify_exception(pe) is ErrorCode.CONFLICT  # nosec B101
    assert classify_exception(RuntimeError("service unavailable")) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_exception(RuntimeError("something odd")) is ErrorCode.UNKNOWN  # nosec B101


def test_authentication_error_defaults():
    err = AuthenticationError(status=401, reason="bad secret")
    assert err.code is ErrorCode.AUTH and err.provider == "gigachat"  # nosec B101
    assert isinstance(err, ProviderError) and err.retryable is False  # nosec B101
