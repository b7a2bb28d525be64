"""
Provider-agnostic interfaces (Protocols) for the providers layer.

Re-exports the single-class modules under
``gigachat_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import (
    HasDefaultModel,
    LLMProvider,
    SupportsFileUpload,
    SupportsStreaming,
)

__all__ = [
    "LLMProvider",
    "SupportsStreaming",
    "SupportsFileUpload",
    "HasDefaultModel",
]
