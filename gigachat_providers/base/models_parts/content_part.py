"""
Structured content part model.

Canonical messages may carry multi-part content (OpenAI-style ``[{"type":
"text", "text": ...}]``). `ContentPart` is the typed form of one such part;
plain mappings and strings are accepted alongside it and flattened the same
way before a request leaves the process.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Optional


ContentPartType = Literal[
    "text",
    "json",
    "tool_call",
    "image",
    "file",
    "other",
]


@dataclass
class ContentPart:
    """A single piece of structured message content.

    Attributes:
        type: The semantic kind of the part, e.g. ``"text"`` or ``"file"``.
        text: Optional textual content for human-readable parts.
        data: Optional adapter-specific payload for non-text parts.
    """

    type: ContentPartType
    text: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = [
    "ContentPart",
    "ContentPartType",
]
