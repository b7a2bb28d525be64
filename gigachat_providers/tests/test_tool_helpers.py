"""Tool identification and argument extraction from canonical deltas."""
from __future__ import annotations

import pytest

from gigachat_providers.base.errors import ArgumentExtractionWarning
from gigachat_providers.base.streaming import CanonicalDelta, ToolCallFragment, parse_tool_args, parse_tools


def _delta(*fragments, is_end=False):
    return CanonicalDelta(tool_calls=list(fragments), is_end=is_end)


def test_identity_of_announced_call():
    ident = parse_tools(_delta(ToolCallFragment(index=0, id="c1", name="f")))
    assert (ident.id, ident.name) == ("c1", "f")  # nosec B101


def test_absent_without_fragments_or_once_terminal():
    assert parse_tools(_delta()) is None  # nosec B101
    assert parse_tools(_delta(ToolCallFragment(id="c1", name="f"), is_end=True)) is None  # nosec B101
    assert parse_tool_args(_delta(ToolCallFragment(arguments_chunk="{}"), is_end=True)) is None  # nosec B101
    assert parse_tools(_delta(ToolCallFragment(arguments_chunk="{"))) is None  # nosec B101


def test_args_with_defaults():
    args = parse_tool_args(_delta(ToolCallFragment(index=None, arguments_chunk=None)))  # type: ignore[arg-type]
    assert (args.index, args.args) == (0, "")  # nosec B101
    args = parse_tool_args(_delta(ToolCallFragment(index=3, arguments_chunk='{"a"')))
    assert (args.index, args.args) == (3, '{"a"')  # nosec B101


@pytest.mark.parametrize(
    "fragment",
    [
        ToolCallFragment(index="0", arguments_chunk="{}"),  # type: ignore[arg-type]
        ToolCallFragment(index=True, arguments_chunk="{}"),
        ToolCallFragment(index=0, arguments_chunk={"a": 1}),
    ],
)
def test_malformed_shape_warns_logs_and_yields_none(fragment, log_events):
    with pytest.warns(ArgumentExtractionWarning):
        assert parse_tool_args(_delta(fragment)) is None  # nosec B101
    assert log_events.named("stream.args.malformed")  # nosec B101
