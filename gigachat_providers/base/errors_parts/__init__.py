"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `gigachat_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .authentication_error import AuthenticationError
from .malformed_chunk_error import MalformedChunkError
from .argument_extraction_warning import ArgumentExtractionWarning
from .classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "AuthenticationError",
    "MalformedChunkError",
    "ArgumentExtractionWarning",
    "classify_exception",
    "code_for_status",
]
