from gigachat_providers.base.streaming.sse import DONE, sse_payload


def test_data_lines_are_unwrapped():
    assert sse_payload('data: {"a": 1}') == '{"a": 1}'  # nosec B101
    assert sse_payload(b'data:{"a": 1}\n') == '{"a": 1}'  # nosec B101


def test_control_and_blank_lines_yield_none():
    for line in (None, "", "   ", ": ping", "event: message", "id: 7", "retry: 1000", "data:"):
        assert sse_payload(line) is None  # nosec B101


def test_done_and_bare_json():
    assert sse_payload("data: [DONE]") == DONE  # nosec B101
    assert sse_payload('{"choices": []}') == '{"choices": []}'  # nosec B101
