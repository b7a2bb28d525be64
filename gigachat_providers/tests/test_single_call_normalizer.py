"""Inbound chunk normalization for the single-call convention."""
from __future__ import annotations

import json
import re

import pytest

from gigachat_providers.base.errors import ErrorCode, MalformedChunkError, ProviderError
from gigachat_providers.base.streaming import CallConvention, normalizer_for
from gigachat_providers.gigachat.history import reshape
from gigachat_providers.base.models import Message, ToolCall
from gigachat_providers.gigachat.stream_helpers import (
    SingleCallNormalizer,
    arguments_text,
    new_tool_call_id,
    parse_chunk,
)


def _chunk(delta, finish_reason=None, **top):
    return json.dumps({"choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}], **top})


def test_selected_by_convention():
    norm = normalizer_for(CallConvention.SINGLE_CALL)
    assert isinstance(norm, SingleCallNormalizer)  # nosec B101
    assert norm.convention is CallConvention.SINGLE_CALL  # nosec B101


def test_zero_choices_is_empty_non_terminal():
    delta = parse_chunk(json.dumps({"choices": []}))
    assert delta.is_end is False  # nosec B101
    assert delta.content == "" and delta.tool_calls == []  # nosec B101


def test_text_and_reasoning():
    delta = parse_chunk(_chunk({"content": "Hel", "reasoning_content": "thinking"}))
    assert (delta.content, delta.reasoning, delta.is_end) == ("Hel", "thinking", False)  # nosec B101


@pytest.mark.parametrize("reason,end", [("stop", True), ("function_call", True), ("length", False), (None, False)])
def test_end_reasons(reason, end):
    assert parse_chunk(_chunk({"content": ""}, reason)).is_end is end  # nosec B101


def test_function_call_synthesized_into_slot_zero():
    delta = parse_chunk(_chunk({"function_call": {"name": "f", "arguments": {"a": 1}}}))
    (frag,) = delta.tool_calls
    assert frag.index == 0 and frag.name == "f"  # nosec B101
    assert json.loads(frag.arguments_chunk) == {"a": 1}  # nosec B101
    assert re.match(r"^gigachat_\d+_[0-9a-z]{9}$", frag.id)  # nosec B101


def test_ids_distinct_across_consecutive_chunks():
    raw = _chunk({"function_call": {"name": "f", "arguments": "{}"}})
    first, second = parse_chunk(raw), parse_chunk(raw)
    assert first.tool_calls[0].id and second.tool_calls[0].id  # nosec B101
    assert first.tool_calls[0].id != second.tool_calls[0].id  # nosec B101
    assert new_tool_call_id() != new_tool_call_id()  # nosec B101


def test_argument_rendering():
    assert arguments_text('{"raw": true}') == '{"raw": true}'  # nosec B101
    assert arguments_text({"q": "привет"}) == '{"q": "привет"}'  # nosec B101
    assert arguments_text(None) == ""  # nosec B101
    delta = parse_chunk(_chunk({"function_call": {"name": "f"}}))
    assert delta.tool_calls[0].arguments_chunk == ""  # nosec B101


def test_raw_tool_calls_pass_through():
    delta = parse_chunk(
        _chunk({"tool_calls": [{"index": 2, "id": "x", "function": {"name": "g", "arguments": "{"}}]})
    )
    (frag,) = delta.tool_calls
    assert (frag.index, frag.id, frag.name, frag.arguments_chunk) == (2, "x", "g", "{")  # nosec B101


def test_continuation_token_from_delta_or_chunk():
    assert parse_chunk(_chunk({"content": "", "functions_state_id": "s1"})).continuation_token == "s1"  # nosec B101
    assert parse_chunk(_chunk({"content": ""}, functions_state_id="s2")).continuation_token == "s2"  # nosec B101
    assert parse_chunk(_chunk({"content": "x"})).continuation_token is None  # nosec B101


def test_error_object_raises_provider_error_with_message():
    with pytest.raises(ProviderError) as ei:
        parse_chunk(json.dumps({"error": {"status": 429, "message": "too many requests"}}))
    assert ei.value.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert ei.value.message == "too many requests"  # nosec B101


def test_malformed_chunk():
    with pytest.raises(MalformedChunkError) as ei:
        parse_chunk("{not json")
    assert ei.value.code is ErrorCode.VALIDATION  # nosec B101
    assert ei.value.chunk == "{not json"  # nosec B101
    with pytest.raises(MalformedChunkError):
        parse_chunk("[1, 2]")
    with pytest.raises(MalformedChunkError):
        parse_chunk(_chunk({"tool_calls": ["not-an-object"]}))


@pytest.mark.parametrize("convention", [CallConvention.SINGLE_CALL, CallConvention.MULTI_CALL])
@pytest.mark.parametrize(
    "data",
    [{"choices": ["text"]}, {"choices": [{"delta": "text"}]}, {"choices": {"0": {}}}],
)
def test_non_object_choice_or_delta_is_malformed(convention, data):
    with pytest.raises(MalformedChunkError) as ei:
        normalizer_for(convention).normalize(json.dumps(data))
    assert ei.value.code is ErrorCode.VALIDATION  # nosec B101


def test_token_and_name_survive_round_trip():
    msg = Message(
        role="assistant",
        content="",
        tool_calls=[ToolCall(id="c1", name="lookup", arguments='{"q":"x"}')],
        continuation_token="tok-1",
    )
    (wire,) = reshape([msg])
    echo = json.dumps(
        {
            "choices": [
                {
                    "delta": {
                        "role": "assistant",
                        "content": wire["content"],
                        "function_call": wire["function_call"],
                        "functions_state_id": wire["functions_state_id"],
                    },
                    "finish_reason": "function_call",
                }
            ]
        }
    )
    delta = parse_chunk(echo)
    assert delta.continuation_token == "tok-1"  # nosec B101
    assert delta.tool_calls[0].name == "lookup"  # nosec B101
    assert json.loads(delta.tool_calls[0].arguments_chunk) == {"q": "x"}  # nosec B101
    assert delta.is_end  # nosec B101
