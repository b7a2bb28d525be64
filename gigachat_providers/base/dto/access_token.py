"""DTO for the identity endpoint's token response."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AccessTokenDTO(BaseModel):
    """Client-credentials exchange result.

    Notes
    -----
    - ``expires_at`` is recorded for diagnostics only; tokens are not
      refreshed on expiry.
    - Unknown fields are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    access_token: str
    expires_at: Optional[int] = None


__all__ = ["AccessTokenDTO"]
