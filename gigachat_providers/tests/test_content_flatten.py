"""Content flattening over the PlainText / PartList / StructuredPart union."""
from __future__ import annotations

from gigachat_providers.base.models import ContentPart
from gigachat_providers.gigachat.content import (
    PartList,
    PlainText,
    StructuredPart,
    classify_content,
    flatten,
)


def test_documented_examples():
    assert flatten("hi") == "hi"  # nosec B101
    assert flatten([{"type": "text", "text": "a"}, "b"]) == "a b"  # nosec B101
    assert flatten({"content": {"text": "c"}}) == "c"  # nosec B101
    assert flatten(42) == "42"  # nosec B101


def test_none_is_empty_string():
    assert flatten(None) == ""  # nosec B101


def test_classification_is_closed():
    assert isinstance(classify_content("x"), PlainText)  # nosec B101
    assert isinstance(classify_content(None), PlainText)  # nosec B101
    assert isinstance(classify_content(["x"]), PartList)  # nosec B101
    assert isinstance(classify_content(("x", "y")), PartList)  # nosec B101
    assert isinstance(classify_content({"text": "x"}), StructuredPart)  # nosec B101
    assert isinstance(classify_content(3.5), StructuredPart)  # nosec B101


def test_content_part_objects_and_nesting():
    parts = [ContentPart(type="text", text="one"), {"content": [{"text": "two"}, "three"]}]
    assert flatten(parts) == "one two three"  # nosec B101


def test_empty_text_is_kept_and_missing_text_falls_through():
    assert flatten({"text": "", "content": "inner"}) == ""  # nosec B101
    assert flatten({"text": None, "content": "inner"}) == "inner"  # nosec B101


def test_empty_text_parts_contribute_empty_text():
    assert flatten({"type": "text", "text": ""}) == ""  # nosec B101
    assert flatten([{"type": "text", "text": ""}, "b"]) == " b"  # nosec B101
    assert flatten([ContentPart(type="text", text="")]) == ""  # nosec B101


def test_unknown_parts_are_stringified():
    assert flatten([1, True]) == "1 True"  # nosec B101
