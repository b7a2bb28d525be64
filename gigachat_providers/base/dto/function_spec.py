"""DTO for a function declaration in the provider ``functions`` list."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel


class FunctionSpecDTO(BaseModel):
    """A callable function offered to the model.

    ``description`` and ``parameters`` are omitted from the wire form when
    absent; an explicit empty ``parameters`` object is kept.
    """

    name: str
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


__all__ = ["FunctionSpecDTO"]
