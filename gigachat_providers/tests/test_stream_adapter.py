"""Base streaming adapter lifecycle with fake starters."""
from __future__ import annotations

import json

from gigachat_providers.base.errors import ErrorCode, ProviderError
from gigachat_providers.base.logging import LogContext, get_logger
from gigachat_providers.base.resilience import RetryConfig
from gigachat_providers.base.streaming import BaseStreamingAdapter, CallConvention, normalizer_for


def _adapter(starter, convention=CallConvention.MULTI_CALL, **kw):
    return BaseStreamingAdapter(
        ctx=LogContext(provider="fake", model="m"),
        provider_name="fake",
        model="m",
        starter=starter,
        normalizer=normalizer_for(convention),
        retry_config_factory=lambda phase: RetryConfig(max_attempts=3, max_delay=0.0),
        logger=get_logger("gigachat.tests.adapter"),
        **kw,
    )


def _line(delta, finish_reason=None):
    return "data: " + json.dumps({"choices": [{"delta": delta, "finish_reason": finish_reason}]})


def test_multi_call_stream_and_done_terminator():
    lines = [
        ": keep-alive",
        _line({"tool_calls": [{"index": 0, "id": "c1", "function": {"name": "f", "arguments": '{"a"'}}]}),
        "",
        _line({"tool_calls": [{"index": 0, "function": {"arguments": ":1}"}}]}),
        _line({}, "tool_calls"),
        "data: [DONE]",
        _line({"content": "after done"}),
    ]
    events = list(_adapter(lambda: iter(lines)).run())
    assert len(events) == 4 and events[-1].finish and events[-1].error is None  # nosec B101
    assert events[2].is_end  # nosec B101


def test_starter_shapes_and_request_id():
    adapter = _adapter(lambda: {"stream": [_line({"content": "x"})], "request_id": "rq-1"})
    events = list(adapter.run())
    assert events[0].delta == "x" and adapter.ctx.request_id == "rq-1"  # nosec B101
    pair = _adapter(lambda: ([_line({"content": "y"})], {"request_id": "rq-2"}))
    assert [e.delta for e in pair.run()][0] == "y"  # nosec B101


def test_start_retry_then_success():
    calls = {"n": 0}

    def starter():
        calls["n"] += 1
        if calls["n"] < 3:
            raise ProviderError(code=ErrorCode.TRANSIENT, message="flaky", provider="fake")
        return [_line({"content": "ok"})]

    events = list(_adapter(starter).run())
    assert calls["n"] == 3 and events[0].delta == "ok"  # nosec B101


def test_unexpected_starter_exception_is_classified():
    def starter():
        raise RuntimeError("request timed out")

    (terminal,) = list(_adapter(starter).run())
    assert terminal.error == "timeout:request timed out"  # nosec B101


def test_on_complete_and_closing():
    class _Lines(list):
        closed = False

        def close(self):
            self.closed = True

    stream = _Lines([_line({"content": "a"})])
    seen = []
    list(_adapter(lambda: stream, on_complete=seen.append).run())
    assert stream.closed and seen == [True]  # nosec B101


def test_midstream_read_error(log_events):
    def lines():
        yield _line({"content": "a"})
        raise ConnectionResetError("peer reset")

    events = list(_adapter(lines).run())
    assert events[-1].error.startswith("unknown:peer reset")  # nosec B101
    (err,) = log_events.named("stream.adapter.error")
    assert err["phase"] == "finalize" and err["emitted"] is True  # nosec B101
