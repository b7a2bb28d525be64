"""Interface protocols, one per module."""

from .has_default_model import HasDefaultModel
from .llm_provider import LLMProvider
from .supports_file_upload import SupportsFileUpload
from .supports_streaming import SupportsStreaming

__all__ = [
    "HasDefaultModel",
    "LLMProvider",
    "SupportsFileUpload",
    "SupportsStreaming",
]
