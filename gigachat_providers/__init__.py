"""gigachat_providers package

Protocol adaptation layer between an OpenAI-style streaming chat client and
the GigaChat API.

Purpose:
    Provide a minimal, stable API for external consumption. Callers use the
    provider directly (``create().stream_chat(...)``) or the translation
    functions under :mod:`gigachat_providers.gigachat` on their own.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`AuthenticationError`, :class:`MalformedChunkError`
    - Provider: :class:`GigaChatProvider`, :func:`create`
    - Models: :class:`ChatRequest`, :class:`Message`, :class:`ToolCall`
"""

from typing import Any, Optional

from .base.errors import (
    AuthenticationError,
    ErrorCode,
    MalformedChunkError,
    ProviderError,
)
from .base.models import ChatRequest, ChatResponse, Message, ToolCall
from .config.defaults import PROVIDER_CLI_DEFAULT_PROVIDER
from .gigachat import GigaChatProvider

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    "AuthenticationError",
    "MalformedChunkError",
    # Provider
    "GigaChatProvider",
    "create",
    # Models
    "ChatRequest",
    "ChatResponse",
    "Message",
    "ToolCall",
]


def create(provider: Optional[str] = None, **kwargs: Any) -> GigaChatProvider:
    """Instantiate a provider by name.

    Parameters:
        provider: Provider key; only ``"gigachat"`` is known.
        **kwargs: Forwarded to the provider constructor.

    Raises:
        ProviderError: unknown provider name (code ``unsupported``).
    """
    name = (provider or PROVIDER_CLI_DEFAULT_PROVIDER).lower().strip()
    if name != "gigachat":
        raise ProviderError(code=ErrorCode.UNSUPPORTED, message=f"unknown provider '{name}'", provider=name)
    return GigaChatProvider(**kwargs)
