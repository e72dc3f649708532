"""Application services (use cases) for the credential lifecycle."""

from __future__ import annotations

from authsvc.services.auth.service import AuthService
from authsvc.services.users.service import UserService

__all__ = ["AuthService", "UserService"]
