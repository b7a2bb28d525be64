"""Message content flattening.

GigaChat accepts only string ``content``. Canonical content arrives in a few
shapes, classified once by :func:`classify_content` into a closed union:

* :class:`PlainText`   - already a string;
* :class:`PartList`    - a sequence of parts (strings, ``{"type": "text",
  "text": ...}`` mappings, ``ContentPart`` objects, nested containers);
* :class:`StructuredPart` - one structured object, or any other value.

:func:`flatten` is total: each part contributes its ``text`` if truthy,
otherwise its nested ``content`` flattened recursively, otherwise ``str()``
of the part. Parts are joined by a single space and ``None`` becomes ``""``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple, Union


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class PartList:
    parts: Tuple[Any, ...]


@dataclass(frozen=True)
class StructuredPart:
    value: Any


ContentShape = Union[PlainText, PartList, StructuredPart]

_MISSING = object()


def classify_content(content: Any) -> ContentShape:
    """Classify raw content into one variant of :data:`ContentShape`."""
    if content is None:
        return PlainText("")
    if isinstance(content, str):
        return PlainText(content)
    if isinstance(content, Sequence) and not isinstance(content, (bytes, bytearray)):
        return PartList(tuple(content))
    return StructuredPart(content)


def _member(item: Any, key: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(key, _MISSING)
    return getattr(item, key, _MISSING)


def _flatten_part(item: Any) -> str:
    if isinstance(item, str):
        return item
    text = _member(item, "text")
    if isinstance(text, str):
        return text
    nested = _member(item, "content")
    if nested is not _MISSING and nested is not None:
        return flatten(nested)
    return str(item)


def flatten(content: Any) -> str:
    """Reduce any canonical content value to plain text."""
    shape = classify_content(content)
    if isinstance(shape, PlainText):
        return shape.text
    if isinstance(shape, PartList):
        return " ".join(_flatten_part(p) for p in shape.parts)
    return _flatten_part(shape.value)


__all__ = [
    "PlainText",
    "PartList",
    "StructuredPart",
    "ContentShape",
    "classify_content",
    "flatten",
]
