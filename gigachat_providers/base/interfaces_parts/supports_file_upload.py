"""SupportsFileUpload Protocol (single-class module)."""

from __future__ import annotations

from typing import BinaryIO, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class SupportsFileUpload(Protocol):
    """Capability marker for providers that accept file attachments.

    ``upload_file`` stores the file remotely and returns the id that message
    ``attachments`` reference.
    """

    def upload_file(
        self,
        file: Union[str, bytes, BinaryIO],
        *,
        filename: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> str:  # pragma: no cover - interface
        ...
