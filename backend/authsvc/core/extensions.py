"""Process-wide extension singletons, bound to the app in :func:`init_app`."""

from __future__ import annotations

from pathlib import Path

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"

# Deterministic constraint names; sign-up maps uq_users_* violations to 409s.
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

db: SQLAlchemy = SQLAlchemy(
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
    session_options={"autoflush": False},
)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
redis_client: redis.Redis | None = None


def init_app(app: Flask) -> None:
    """
    Bind the database, migrations and JWT signing to ``app``.

    A Redis client is created only when ``REDIS_URL`` is set, and the app
    refuses to start if that server does not answer ``PING``.

    :raises RuntimeError: ``REDIS_URL`` is set but unreachable.
    """
    global redis_client

    db.init_app(app)
    from authsvc import models as _models  # noqa: F401  (register tables on the metadata)

    migrate.init_app(app, db, directory=str(MIGRATIONS_DIR))
    jwt.init_app(app)

    url = app.config.get("REDIS_URL")
    if not url:
        redis_client = None
        app.extensions.pop("redis_client", None)
        return

    client = redis.Redis.from_url(url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Redis at {url!r} is unreachable") from exc
    redis_client = client
    app.extensions["redis_client"] = client


def get_redis() -> redis.Redis:
    """Return the Redis client backing ``REFRESH_TOKEN_STORE="redis"``."""
    if redis_client is None:
        raise RuntimeError("REFRESH_TOKEN_STORE='redis' requires REDIS_URL to be set.")
    return redis_client
