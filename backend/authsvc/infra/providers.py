"""Build the credential-lifecycle adapters once per app and expose them."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import cast

from flask import Flask, current_app

from authsvc.core.extensions import get_redis
from authsvc.services._shared.ports import PasswordHasher, RefreshTokenStore, TokenCodec

log = logging.getLogger(__name__)

TOKEN_CODEC_KEY = "authsvc.token_codec"
REFRESH_STORE_KEY = "authsvc.refresh_store"
PASSWORD_HASHER_KEY = "authsvc.password_hasher"


def build_refresh_store(app: Flask) -> RefreshTokenStore:
    """Select the refresh-token backend named by ``REFRESH_TOKEN_STORE``.

    :raises RuntimeError: On an unknown backend name.
    """
    backend = str(app.config.get("REFRESH_TOKEN_STORE", "sql")).strip().lower()
    if backend == "sql":
        from authsvc.infra.sql import SQLRefreshTokenStore

        return SQLRefreshTokenStore()
    if backend == "redis":
        from authsvc.infra.redis import RedisRefreshTokenStore

        return RedisRefreshTokenStore(r=get_redis())
    raise RuntimeError(f"Unknown REFRESH_TOKEN_STORE backend: {backend!r}")


def init_app(app: Flask) -> None:
    """Register the token codec, refresh store and password hasher on ``app``.

    Must run after :func:`authsvc.core.extensions.init_app` so the Redis
    client exists when the Redis backend is selected.
    """
    from authsvc.infra.jwt import FlaskJWTTokenCodec
    from authsvc.infra.security import WerkzeugPasswordHasher

    app.extensions[TOKEN_CODEC_KEY] = FlaskJWTTokenCodec(
        access_ttl=timedelta(milliseconds=int(app.config["ACCESS_TOKEN_TTL_MS"])),
        refresh_bytes=int(app.config.get("REFRESH_TOKEN_BYTES", 48)),
    )
    app.extensions[REFRESH_STORE_KEY] = build_refresh_store(app)
    app.extensions[PASSWORD_HASHER_KEY] = WerkzeugPasswordHasher(
        method=str(app.config.get("PASSWORD_HASH_METHOD", "scrypt"))
    )
    log.debug(
        "auth adapters ready (refresh store=%s)",
        type(app.extensions[REFRESH_STORE_KEY]).__name__,
    )


def token_codec() -> TokenCodec:
    return cast(TokenCodec, current_app.extensions[TOKEN_CODEC_KEY])


def refresh_store() -> RefreshTokenStore:
    return cast(RefreshTokenStore, current_app.extensions[REFRESH_STORE_KEY])


def password_hasher() -> PasswordHasher:
    return cast(PasswordHasher, current_app.extensions[PASSWORD_HASHER_KEY])
