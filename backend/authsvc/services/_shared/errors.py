"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between
repositories, ports, adapters and application services.

The translation to HTTP responses (RFC 7807) is handled by
``authsvc/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports the failing
    ``table.column`` pair, so callers may pass either form.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint name (``uq_users_email``) or column
        reference (``users.email``) to look for.
    :returns: ``True`` if the IntegrityError matches.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - All of them are terminal for the current request (never retried).
    """


# --------------------------------------------------------------------------- #
# Credential lifecycle taxonomy
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(ServiceError):
    """
    Raised when sign-in fails.

    The message is identical for "unknown account" and "wrong password" so the
    response never reveals which part was wrong.
    """

    def __init__(self, message: str = "Invalid username/email or password") -> None:
        super().__init__(message)


class BadRequestError(ServiceError):
    """Raised for malformed input or an unknown/expired refresh token."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Client-safe explanation, e.g. ``"Username is already taken!"``.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail


class ConfigurationError(ServiceError):
    """
    Raised when the deployment is missing required state (e.g. an unseeded role).

    This signals an operator error, not a user error, and is logged at ERROR.
    """


# --------------------------------------------------------------------------- #
# Access-token validation failures
# --------------------------------------------------------------------------- #


class TokenInvalidError(ServiceError):
    """Base class for access-token validation failures (401 externally)."""

    reason = "invalid"

    def __init__(self, message: str = "Invalid access token") -> None:
        super().__init__(message)


class SignatureInvalidError(TokenInvalidError):
    """The token signature does not match the process signing key."""

    reason = "signature_invalid"


class TokenExpiredError(TokenInvalidError):
    """The token signature is valid but ``now >= exp``."""

    reason = "expired"


class MalformedTokenError(TokenInvalidError):
    """The token cannot be parsed or lacks required claims."""

    reason = "malformed"
