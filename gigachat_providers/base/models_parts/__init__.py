"""Models parts package: one DTO per module, re-exported by ``base.models``."""

from .content_part import ContentPart, ContentPartType
from .tool_call import ToolCall
from .message import Message, MessageContent, Role
from .provider_metadata import ProviderMetadata
from .chat_request import ChatRequest
from .chat_response import ChatResponse

__all__ = [
    "ContentPart",
    "ContentPartType",
    "ToolCall",
    "Message",
    "MessageContent",
    "Role",
    "ProviderMetadata",
    "ChatRequest",
    "ChatResponse",
]
