from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Protocol

from authsvc.services._shared.errors import (
    MalformedTokenError,
    SignatureInvalidError,
    TokenExpiredError,
)


class TokenStatus(Enum):
    """Outcome of validating an access token."""

    VALID = auto()
    SIGNATURE_INVALID = auto()
    EXPIRED = auto()
    MALFORMED = auto()


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Identity recovered from a valid access token.

    :ivar subject_id: Account id (``users.id``).
    :ivar roles: Role names embedded in the token, in claim order.
    """

    subject_id: int
    roles: tuple[str, ...]

    def has_role(self, role: str) -> bool:
        return role in self.roles


@dataclass(frozen=True, slots=True)
class TokenValidation:
    """
    Result of :meth:`TokenCodec.validate`.

    Callers branch on :attr:`status`, or call :meth:`raise_for_status` to turn
    a failure into the matching service error.
    """

    status: TokenStatus
    principal: Principal | None = None

    @property
    def ok(self) -> bool:
        return self.status is TokenStatus.VALID

    def raise_for_status(self) -> Principal:
        """Return the principal, or raise the error matching the failure reason."""
        if self.status is TokenStatus.VALID and self.principal is not None:
            return self.principal
        if self.status is TokenStatus.EXPIRED:
            raise TokenExpiredError("Access token expired")
        if self.status is TokenStatus.SIGNATURE_INVALID:
            raise SignatureInvalidError("Access token signature mismatch")
        raise MalformedTokenError("Access token malformed")


class TokenCodec(Protocol):
    """Port for minting and validating access tokens and opaque refresh strings."""

    @property
    def access_ttl_ms(self) -> int: ...

    def mint(
        self,
        *,
        subject_id: int,
        roles: Iterable[str],
        issued_at: datetime | None = None,
    ) -> str:
        """Return a signed token expiring at ``issued_at + access TTL``."""

    def validate(self, token: str) -> TokenValidation:
        """Check signature first, then expiry; never raise for bad input."""

    def mint_refresh_opaque(self) -> str:
        """Return a cryptographically random, URL-safe opaque string."""
