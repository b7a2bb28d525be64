"""Streaming package: canonical deltas, normalizers, accumulation and the adapter loop."""

from .canonical_delta import CanonicalDelta, ToolCallFragment
from .normalizers import CallConvention, DeltaNormalizer, MultiCallNormalizer, normalizer_for
from .tool_helpers import ToolArgs, ToolIdentity, parse_tool_args, parse_tools
from .accumulator import ToolCallAccumulator
from .streaming import ChatStreamEvent, accumulate_events
from .streaming_metrics import StreamMetrics, apply_usage, build_token_usage
from .streaming_finalize import finalize_stream
from .streaming_adapter import BaseStreamingAdapter
from .sse import DONE, ResponseLines, sse_payload

__all__ = [
    "CanonicalDelta",
    "ToolCallFragment",
    "CallConvention",
    "DeltaNormalizer",
    "MultiCallNormalizer",
    "normalizer_for",
    "ToolArgs",
    "ToolIdentity",
    "parse_tool_args",
    "parse_tools",
    "ToolCallAccumulator",
    "ChatStreamEvent",
    "accumulate_events",
    "StreamMetrics",
    "apply_usage",
    "build_token_usage",
    "finalize_stream",
    "BaseStreamingAdapter",
    "DONE",
    "ResponseLines",
    "sse_payload",
]
