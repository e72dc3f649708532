"""
authsvc.services._shared.ports
==============================

Collection of *ports* (hexagonal interfaces) that define the contracts for
token management and credential infrastructure.

These ports decouple the service layer from concrete implementations of token
signing, password hashing and refresh-token persistence.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec` plus the :class:`~.TokenValidation` result
    type and the :class:`~.Principal` recovered from a valid token.

- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore`, :class:`~.RefreshTokenRecord` and the
    :class:`~.InMemoryRefreshTokenStore` test double.

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`.

Concrete adapters (SQLAlchemy, Redis, flask-jwt-extended, Werkzeug) live under
``authsvc.infra``.
"""

from __future__ import annotations

from .password_hasher import PasswordHasher
from .refresh_token_store import (
    InMemoryRefreshTokenStore,
    RefreshTokenRecord,
    RefreshTokenStore,
    as_utc,
)
from .token_codec import Principal, TokenCodec, TokenStatus, TokenValidation

__all__ = [
    "PasswordHasher",
    "TokenCodec",
    "TokenStatus",
    "TokenValidation",
    "Principal",
    "RefreshTokenStore",
    "RefreshTokenRecord",
    "InMemoryRefreshTokenStore",
    "as_utc",
]
