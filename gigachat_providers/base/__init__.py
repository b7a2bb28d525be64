"""
Providers base package.

Provider-agnostic building blocks shared by adapters:

- Models (DTOs): canonical request/response/message objects
- Interfaces: provider capability protocols
- Streaming: canonical deltas, normalizers, accumulation, the adapter loop
- Infrastructure: errors, logging, timeouts, retry, cancellation, HTTP pool
"""

from .errors import (
    ArgumentExtractionWarning,
    AuthenticationError,
    ErrorCode,
    MalformedChunkError,
    ProviderError,
)
from .interfaces import HasDefaultModel, LLMProvider, SupportsFileUpload, SupportsStreaming
from .models import (
    ChatRequest,
    ChatResponse,
    ContentPart,
    ContentPartType,
    Message,
    ProviderMetadata,
    Role,
    ToolCall,
)
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken, CancelledError
from .streaming import (
    BaseStreamingAdapter,
    CallConvention,
    CanonicalDelta,
    ChatStreamEvent,
    StreamMetrics,
    ToolCallAccumulator,
    ToolCallFragment,
    accumulate_events,
    finalize_stream,
    normalizer_for,
)

__all__ = [
    # Errors
    "ErrorCode",
    "ProviderError",
    "AuthenticationError",
    "MalformedChunkError",
    "ArgumentExtractionWarning",
    # Models
    "Role",
    "ContentPartType",
    "ContentPart",
    "ToolCall",
    "Message",
    "ProviderMetadata",
    "ChatRequest",
    "ChatResponse",
    # Interfaces
    "LLMProvider",
    "SupportsStreaming",
    "SupportsFileUpload",
    "HasDefaultModel",
    # Infrastructure
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "BaseStreamingAdapter",
    "CallConvention",
    "CanonicalDelta",
    "ChatStreamEvent",
    "StreamMetrics",
    "ToolCallAccumulator",
    "ToolCallFragment",
    "accumulate_events",
    "finalize_stream",
    "normalizer_for",
]
