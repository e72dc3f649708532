from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from authsvc.services._shared.errors import ConflictError


@dataclass(frozen=True, slots=True)
class RefreshTokenRecord:
    """
    Read-model for a persisted refresh token.

    :ivar token: Opaque token string (primary key).
    :ivar user_id: Owning account id.
    :ivar expires_at: Absolute expiration (UTC, timezone-aware).
    """

    token: str
    user_id: int
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


def as_utc(dt: datetime) -> datetime:
    """Label naive datetimes as UTC (SQLite drops tzinfo); convert aware ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


class RefreshTokenStore(Protocol):
    """
    Durable mapping from opaque token string to ``{user, expiration}``.

    Implementations MUST enforce token uniqueness atomically.
    """

    def save(self, *, token: str, user_id: int, expires_at: datetime) -> RefreshTokenRecord:
        """
        Insert a new record.

        :raises ConflictError: If ``token`` already exists.
        """

    def find_by_token(self, token: str) -> RefreshTokenRecord | None:
        """Return the record for ``token``, or ``None`` when unknown."""


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    In-memory refresh token store.

    .. note::
       Uses a threading lock to make check-and-insert atomic in unit tests.
    """

    def __init__(self) -> None:
        self._by_token: dict[str, RefreshTokenRecord] = {}
        self._lock = threading.Lock()

    def save(self, *, token: str, user_id: int, expires_at: datetime) -> RefreshTokenRecord:
        record = RefreshTokenRecord(token=token, user_id=user_id, expires_at=as_utc(expires_at))
        with self._lock:
            if token in self._by_token:
                raise ConflictError("RefreshToken", "Refresh token already exists")
            self._by_token[token] = record
        return record

    def find_by_token(self, token: str) -> RefreshTokenRecord | None:
        return self._by_token.get(token)

    def __len__(self) -> int:
        return len(self._by_token)
