"""DTO describing the single active function call of a provider message.

GigaChat carries at most one call per assistant message, with ``arguments``
as a JSON object rather than JSON text.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field


class FunctionCallDTO(BaseModel):
    """Represents a provider-side ``function_call``.

    Parameters
    ----------
    name:
        The function name.
    arguments:
        Decoded arguments object. Defaults to an empty mapping.
    """

    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["FunctionCallDTO"]
