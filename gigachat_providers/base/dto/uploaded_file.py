"""DTO for the file upload endpoint response."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class UploadedFileDTO(BaseModel):
    """Descriptor of a file stored by the provider.

    Only ``id`` is required; it is what message ``attachments`` reference.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    filename: Optional[str] = None
    purpose: Optional[str] = None
    bytes: Optional[int] = None
    created_at: Optional[int] = None


__all__ = ["UploadedFileDTO"]
