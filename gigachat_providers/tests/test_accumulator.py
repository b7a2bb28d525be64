"""Folding canonical deltas into a completed assistant turn."""
from __future__ import annotations

import json

import pytest

from gigachat_providers.base.errors import ArgumentExtractionWarning
from gigachat_providers.base.streaming import (
    CanonicalDelta,
    ChatStreamEvent,
    ToolCallAccumulator,
    ToolCallFragment,
    accumulate_events,
)
from gigachat_providers.gigachat.stream_helpers import parse_chunk


def test_text_reasoning_and_token():
    acc = ToolCallAccumulator()
    acc.add(CanonicalDelta(content="Hel", reasoning="r1"))
    acc.add(CanonicalDelta(content="lo", continuation_token="t1"))
    acc.add(CanonicalDelta(is_end=True, finish_reason="stop", continuation_token="t2"))
    msg = acc.message()
    assert (msg.content, msg.tool_calls, msg.continuation_token) == ("Hello", None, "t2")  # nosec B101
    assert acc.reasoning == "r1" and acc.ended  # nosec B101


def test_fragments_concatenate_per_index_in_arrival_order():
    acc = ToolCallAccumulator()
    acc.add(CanonicalDelta(tool_calls=[ToolCallFragment(index=0, id="a", name="f", arguments_chunk='{"x"')]))
    acc.add(CanonicalDelta(tool_calls=[ToolCallFragment(index=1, id="b", name="g", arguments_chunk="{}")]))
    acc.add(CanonicalDelta(tool_calls=[ToolCallFragment(index=0, id="other", arguments_chunk=":1}")]))
    first, second = acc.tool_calls()
    assert (first.id, first.name, first.arguments) == ("a", "f", '{"x":1}')  # nosec B101
    assert (second.id, second.name, second.arguments) == ("b", "g", "{}")  # nosec B101


def test_end_is_sticky():
    acc = ToolCallAccumulator()
    acc.add(CanonicalDelta(is_end=True))
    acc.add(CanonicalDelta(content="late"))
    assert acc.ended  # nosec B101


def test_malformed_fragment_skipped():
    acc = ToolCallAccumulator()
    with pytest.warns(ArgumentExtractionWarning):
        acc.add(CanonicalDelta(tool_calls=[ToolCallFragment(index="x", arguments_chunk="{}")]))  # type: ignore[arg-type]
    assert acc.tool_calls() == []  # nosec B101


def test_two_chunk_function_call_end_to_end():
    chunks = [
        json.dumps({"choices": [{"delta": {"content": "", "function_call": {"name": "f", "arguments": "{\"a\":1}"}}, "finish_reason": None}]}),
        json.dumps({"choices": [{"delta": {"content": "", "functions_state_id": "st-1"}, "finish_reason": "function_call"}]}),
    ]
    deltas = [parse_chunk(c) for c in chunks]
    assert [d.is_end for d in deltas] == [False, True]  # nosec B101
    acc = ToolCallAccumulator()
    for d in deltas:
        acc.add(d)
    msg = acc.message()
    (call,) = msg.tool_calls
    assert call.name == "f" and call.arguments == '{"a":1}'  # nosec B101
    assert call.id.startswith("gigachat_")  # nosec B101
    assert msg.continuation_token == "st-1"  # nosec B101


def test_call_on_terminal_delta_is_kept():
    raw = json.dumps({"choices": [{"delta": {"function_call": {"name": "f", "arguments": {}}}, "finish_reason": "function_call"}]})
    acc = ToolCallAccumulator()
    acc.add(parse_chunk(raw))
    assert [c.name for c in acc.tool_calls()] == ["f"]  # nosec B101


def test_accumulate_events_success_and_error():
    events = [
        ChatStreamEvent(provider="gigachat", model="m", delta="a", canonical=CanonicalDelta(content="a")),
        ChatStreamEvent(provider="gigachat", model="m", delta="b", canonical=CanonicalDelta(content="b", continuation_token="t")),
        ChatStreamEvent(provider="gigachat", model="m", delta=None, finish=True),
    ]
    resp = accumulate_events(events)
    assert (resp.text, resp.continuation_token, resp.error) == ("ab", "t", None)  # nosec B101

    failed = accumulate_events(events[:1] + [ChatStreamEvent(provider="gigachat", model="m", delta=None, finish=True, error="rate_limit:slow down")])
    assert failed.text == "a"  # nosec B101
    assert failed.meta.extra["code"] == "rate_limit"  # nosec B101
    assert failed.error == "rate_limit:slow down"  # nosec B101
