"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val.strip())


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str
        Process-wide key used by ``flask-jwt-extended`` to sign access tokens.
        Read once at startup and never regenerated at runtime.
    ACCESS_TOKEN_TTL_MS: int
        Lifetime of an access token in milliseconds.
    REFRESH_TOKEN_TTL_DAYS: int
        Lifetime of a persisted refresh token in days.
    REFRESH_TOKEN_BYTES: int
        Entropy (bytes) of the opaque refresh token string.
    REFRESH_TOKEN_SAVE_ATTEMPTS: int
        How many fresh strings to try when the store reports a collision.
    ENFORCE_REFRESH_EXPIRY: bool
        Reject refresh exchanges whose stored record has expired.
    REFRESH_TOKEN_STORE: str
        Backend for refresh tokens: ``"sql"`` or ``"redis"``.
    REDIS_URL: str | None
        Redis connection URL; required when ``REFRESH_TOKEN_STORE="redis"``.
    PASSWORD_HASH_METHOD: str
        Werkzeug hashing method for stored passwords (``scrypt`` by default).
    DEFAULT_ROLE: str
        Role assigned to every new account on sign-up.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins. ``"*"`` (the default) allows
        every origin on every path.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT_development_signing_key_0000")
    JWT_ALGORITHM = "HS256"

    # Token lifetimes
    ACCESS_TOKEN_TTL_MS = env_int("ACCESS_TOKEN_TTL_MS", 604_800_000)  # 7 days
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(milliseconds=ACCESS_TOKEN_TTL_MS)
    REFRESH_TOKEN_TTL_DAYS = env_int("REFRESH_TOKEN_TTL_DAYS", 360)
    REFRESH_TOKEN_BYTES = env_int("REFRESH_TOKEN_BYTES", 48)
    REFRESH_TOKEN_SAVE_ATTEMPTS = env_int("REFRESH_TOKEN_SAVE_ATTEMPTS", 3)
    ENFORCE_REFRESH_EXPIRY = env_bool("ENFORCE_REFRESH_EXPIRY", True)
    REFRESH_TOKEN_STORE = os.getenv("REFRESH_TOKEN_STORE", "sql")
    REDIS_URL = os.getenv("REDIS_URL")

    # Accounts
    DEFAULT_ROLE = os.getenv("DEFAULT_ROLE", "ROLE_USER")
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Always uses the SQL refresh-token store.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    JWT_SECRET_KEY = "testing-only-signing-key-with-enough-entropy-000"
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    REFRESH_TOKEN_STORE = "sql"
    REDIS_URL = None
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
