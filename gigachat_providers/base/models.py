"""
Provider-agnostic domain models (DTOs) public surface.

Re-exports the one-class-per-file implementations under
``gigachat_providers.base.models_parts``.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.tool_call import ToolCall
from .models_parts.message import Message, MessageContent, Role
from .models_parts.provider_metadata import ProviderMetadata
from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse

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
