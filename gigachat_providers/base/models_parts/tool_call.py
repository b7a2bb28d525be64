"""
Completed tool call model.

A `ToolCall` is one fully reassembled call requested by the assistant: its id,
the function name and the complete JSON argument text. It serializes to the
canonical (OpenAI-style) ``{"id", "type", "function": {"name", "arguments"}}``
shape used in message history.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping


@dataclass
class ToolCall:
    """A completed assistant tool call.

    Attributes:
        id: Call identifier (synthesized by the stream normalizer when the
            provider does not send one).
        name: Function name.
        arguments: Complete JSON argument text (may be ``""``).
    """

    id: str
    name: str
    arguments: str = ""

    def parsed_arguments(self) -> Dict[str, Any]:
        """Return arguments decoded as an object; ``{}`` when empty or unparsable."""
        if not self.arguments:
            return {}
        try:
            value = json.loads(self.arguments)
        except ValueError:
            return {}
        return value if isinstance(value, dict) else {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ToolCall":
        """Build from the canonical mapping shape (``function`` nested or flat)."""
        fn = data.get("function") or {}
        arguments = fn.get("arguments", data.get("arguments", ""))
        if not isinstance(arguments, str):
            arguments = json.dumps(arguments, ensure_ascii=False)
        return cls(
            id=str(data.get("id") or ""),
            name=str(fn.get("name") or data.get("name") or ""),
            arguments=arguments,
        )


__all__ = ["ToolCall"]
