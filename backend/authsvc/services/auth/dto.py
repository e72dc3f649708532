# authsvc/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignInIn:
    """
    Input DTO for sign-in.

    :param username_or_email: Username or email typed by the user.
    :type username_or_email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    username_or_email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Opaque refresh string issued at sign-in.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class SignUpIn:
    """
    Input DTO for account registration.

    :param name: Display name.
    :param username: Public handle (unique).
    :param email: Login email (unique, normalized by the model).
    :param password: Raw password; only its hash is stored.
    """

    name: str
    username: str
    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Signed access JWT.
    :type access_token: str
    :param refresh_token: Opaque refresh string.
    :type refresh_token: str
    :param expires_in_ms: Access-token lifetime in milliseconds.
    :type expires_in_ms: int
    :param token_type: Authorization scheme for the access token.
    :type token_type: str
    """

    access_token: str
    refresh_token: str
    expires_in_ms: int
    token_type: str = "Bearer"


@dataclass(frozen=True, slots=True)
class SignUpOut:
    """Identity of a freshly registered account."""

    user_id: int
    username: str


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission and account defaults.

    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    :param save_attempts: Fresh strings tried when the store reports a collision.
    :type save_attempts: int
    :param enforce_refresh_expiry: Reject expired refresh tokens on exchange.
    :type enforce_refresh_expiry: bool
    :param default_role: Role name attached to every new account.
    :type default_role: str
    """

    refresh_expires: timedelta = timedelta(days=360)
    save_attempts: int = 3
    enforce_refresh_expiry: bool = True
    default_role: str = "ROLE_USER"

    @classmethod
    def from_mapping(cls, config) -> AuthTokenConfig:
        """Build from a Flask ``app.config``-like mapping."""
        return cls(
            refresh_expires=timedelta(days=int(config.get("REFRESH_TOKEN_TTL_DAYS", 360))),
            save_attempts=int(config.get("REFRESH_TOKEN_SAVE_ATTEMPTS", 3)),
            enforce_refresh_expiry=bool(config.get("ENFORCE_REFRESH_EXPIRY", True)),
            default_role=str(config.get("DEFAULT_ROLE", "ROLE_USER")),
        )
