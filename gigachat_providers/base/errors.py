"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``gigachat_providers.base.errors_parts`` to keep a single stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.authentication_error import AuthenticationError
from .errors_parts.malformed_chunk_error import MalformedChunkError
from .errors_parts.argument_extraction_warning import ArgumentExtractionWarning
from .errors_parts.classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "AuthenticationError",
    "MalformedChunkError",
    "ArgumentExtractionWarning",
    "classify_exception",
    "code_for_status",
]
