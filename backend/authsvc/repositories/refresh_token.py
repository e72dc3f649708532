"""Refresh-token repository keyed by the opaque token string."""

from __future__ import annotations

from typing import Any

from authsvc.models.refresh_token import RefreshToken
from authsvc.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken`."""

    model = RefreshToken

    def _pk_attr(self) -> Any:
        return RefreshToken.token
