"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    ApiResponseSchema,
    RefreshSchema,
    SignInSchema,
    SignUpSchema,
    TokenPairSchema,
)
from .user import UserProfileSchema

__all__ = [
    "ApiResponseSchema",
    "RefreshSchema",
    "SignInSchema",
    "SignUpSchema",
    "TokenPairSchema",
    "UserProfileSchema",
]
