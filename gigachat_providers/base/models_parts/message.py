"""
Canonical message DTO.

Defines the `Message` dataclass and the `Role` literal. Content may be plain
text, a list of parts (``ContentPart``, mappings or strings), a single
structured object, or ``None``; providers that only accept strings flatten it
at the request boundary.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from .content_part import ContentPart
from .tool_call import ToolCall


Role = Literal["system", "user", "assistant", "tool"]

MessageContent = Union[str, List[Union[str, ContentPart, Dict[str, Any]]], Dict[str, Any], None]


@dataclass
class Message:
    """A canonical chat message.

    Attributes:
        role: Author role (``"system"``, ``"user"``, ``"assistant"``, ``"tool"``).
        content: Text, list of parts, a structured object or ``None``.
        name: Optional author or function name. For ``tool`` messages this is
            the name of the function whose result the message carries.
        tool_call_id: For ``tool`` messages, the id of the originating call.
        tool_calls: For ``assistant`` messages, the calls the model requested.
        continuation_token: Opaque provider state returned with an assistant
            turn that must be sent back with that turn on the next request.
        attachments: Ids of previously uploaded files referenced by the message.
    """

    role: Role
    content: MessageContent
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    continuation_token: Optional[str] = None
    attachments: Optional[List[str]] = None

    def is_structured(self) -> bool:
        """Return True if the content is not plain text."""
        return not isinstance(self.content, str)

    def to_dict(self) -> Dict[str, Any]:
        """Return the canonical (OpenAI-style) mapping for this message."""
        content = self.content
        if isinstance(content, list):
            content = [p.to_dict() if isinstance(p, ContentPart) else p for p in content]
        out: Dict[str, Any] = {"role": self.role, "content": content}
        if self.name:
            out["name"] = self.name
        if self.tool_call_id:
            out["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            out["tool_calls"] = [c.to_dict() for c in self.tool_calls]
        if self.continuation_token:
            out["continuation_token"] = self.continuation_token
        if self.attachments:
            out["attachments"] = list(self.attachments)
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        """Build a message from its canonical mapping form.

        ``functions_state_id`` is accepted as an alias of
        ``continuation_token`` so provider-shaped history can be replayed.
        """
        raw_calls = data.get("tool_calls")
        tool_calls = [ToolCall.from_dict(c) for c in raw_calls] if raw_calls else None
        return cls(
            role=data.get("role", "user"),
            content=data.get("content"),
            name=data.get("name"),
            tool_call_id=data.get("tool_call_id"),
            tool_calls=tool_calls,
            continuation_token=data.get("continuation_token") or data.get("functions_state_id"),
            attachments=list(data["attachments"]) if data.get("attachments") else None,
        )


__all__ = [
    "Message",
    "MessageContent",
    "Role",
]
