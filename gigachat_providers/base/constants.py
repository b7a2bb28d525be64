"""Base shared constants for provider adapters.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential sentinel (no client id / secret configured)
MISSING_CREDENTIALS_ERROR = "missing_credentials"  # pragma: allowlist secret - sentinel string

# Request headers
RQUID_HEADER = "RqUID"
SESSION_ID_HEADER = "X-Session-ID"

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"

__all__ = [
    "MISSING_CREDENTIALS_ERROR",
    "RQUID_HEADER",
    "SESSION_ID_HEADER",
    "JSON_MEDIA_TYPE",
    "FORM_MEDIA_TYPE",
]
