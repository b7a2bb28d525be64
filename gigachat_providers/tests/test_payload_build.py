"""Outbound payload transformation."""
from __future__ import annotations

import copy

from gigachat_providers.gigachat.payload import build_payload


def test_tools_and_auto_choice():
    out = build_payload(
        {
            "tools": [{"type": "function", "function": {"name": "f", "parameters": {}}}],
            "tool_choice": "auto",
        }
    )
    assert out == {"functions": [{"name": "f", "parameters": {}}], "function_call": "auto"}  # nosec B101


def test_description_kept_and_absent_fields_omitted():
    out = build_payload(
        {
            "tools": [
                {"type": "function", "function": {"name": "a", "description": "does a", "parameters": {"type": "object"}}},
                {"type": "function", "function": {"name": "b"}},
            ]
        }
    )
    assert out["functions"] == [  # nosec B101
        {"name": "a", "description": "does a", "parameters": {"type": "object"}},
        {"name": "b"},
    ]


def test_none_literal_and_named_function_choice():
    assert build_payload({"tool_choice": "none"}) == {"function_call": "none"}  # nosec B101
    named = build_payload({"tool_choice": {"type": "function", "function": {"name": "lookup"}}})
    assert named == {"function_call": {"name": "lookup"}}  # nosec B101


def test_unsupported_choice_dropped_and_logged(log_events):
    out = build_payload({"tool_choice": "required", "model": "GigaChat"})
    assert out == {"model": "GigaChat"}  # nosec B101
    assert log_events.named("payload.tool_choice.dropped")[0]["tool_choice"] == "required"  # nosec B101


def test_streaming_sets_update_interval():
    assert build_payload({"stream": True})["update_interval"] == 0  # nosec B101
    assert "update_interval" not in build_payload({"stream": False})  # nosec B101


def test_strips_parallel_calls_and_tool_config():
    out = build_payload({"model": "m", "parallel_tool_calls": False, "tool_config": {"x": 1}, "top_p": 0.5})
    assert out == {"model": "m", "top_p": 0.5}  # nosec B101


def test_messages_are_reshaped():
    out = build_payload(
        {
            "messages": [
                {"role": "user", "content": [{"type": "text", "text": "hi"}]},
                {"role": "tool", "name": "f", "tool_call_id": "c", "content": "r"},
            ]
        }
    )
    assert out["messages"] == [  # nosec B101
        {"role": "user", "content": "hi"},
        {"role": "function", "content": "r", "name": "f"},
    ]


def test_input_not_mutated():
    canonical = {
        "messages": [{"role": "user", "content": "x"}],
        "tools": [{"type": "function", "function": {"name": "f"}}],
        "tool_choice": "auto",
        "stream": True,
    }
    before = copy.deepcopy(canonical)
    build_payload(canonical)
    assert canonical == before  # nosec B101


def test_empty_text_part_sends_empty_content():
    out = build_payload({"messages": [{"role": "user", "content": [{"type": "text", "text": ""}]}]})
    assert out["messages"] == [{"role": "user", "content": ""}]  # nosec B101
