"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from authsvc.repositories.base import BaseRepository
from authsvc.repositories.refresh_token import RefreshTokenRepository
from authsvc.repositories.role import RoleRepository
from authsvc.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "RefreshTokenRepository",
    "RoleRepository",
    "UserRepository",
]
