# comments in English; reST docstrings
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

import redis  # type: ignore[import-untyped]

from authsvc.services._shared.errors import ConflictError
from authsvc.services._shared.ports import RefreshTokenRecord, RefreshTokenStore, as_utc

log = logging.getLogger(__name__)


@dataclass(slots=True)
class RedisRefreshTokenStore(RefreshTokenStore):
    """
    Redis-backed refresh token store.

    Each token is a hash ``rt:<token>`` holding ``user_id`` and ``expires_at``
    (ISO-8601, UTC). The key TTL tracks the token expiration, so Redis evicts
    records on its own once they can no longer be exchanged.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    # -------------------- helpers --------------------

    @staticmethod
    def _k(token: str) -> str:
        return f"rt:{token}"

    @staticmethod
    def _ttl_seconds(expires_at: datetime) -> int:
        return max(1, int((expires_at - datetime.now(UTC)).total_seconds()))

    @staticmethod
    def _b(value: bytes | str | None, default: str = "") -> str:
        if value is None:
            return default
        return value.decode() if isinstance(value, bytes | bytearray) else str(value)

    # -------------------- API ------------------------

    def save(self, *, token: str, user_id: int, expires_at: datetime) -> RefreshTokenRecord:
        """
        Insert ``token`` unless it already exists.

        Uses WATCH/MULTI/EXEC so the existence check and the write commit
        together; a concurrent writer on the same key aborts this transaction.
        """
        expires_at = as_utc(expires_at)
        key = self._k(token)
        try:
            with self.r.pipeline() as p:
                p.watch(key)
                if p.exists(key):
                    p.unwatch()
                    raise ConflictError("RefreshToken", "Refresh token already exists")
                p.multi()
                p.hset(
                    key,
                    mapping={"user_id": str(user_id), "expires_at": expires_at.isoformat()},
                )
                p.expire(key, self._ttl_seconds(expires_at))
                p.execute()
        except redis.WatchError as exc:
            log.warning("refresh token insert raced", extra={"subject_id": user_id})
            raise ConflictError("RefreshToken", "Refresh token already exists") from exc
        return RefreshTokenRecord(token=token, user_id=user_id, expires_at=expires_at)

    def find_by_token(self, token: str) -> RefreshTokenRecord | None:
        h = self.r.hgetall(self._k(token))
        if not h:
            return None
        # Clients may or may not use decode_responses
        fields = {self._b(k): self._b(v) for k, v in h.items()}
        return RefreshTokenRecord(
            token=token,
            user_id=int(fields.get("user_id", "0")),
            expires_at=as_utc(datetime.fromisoformat(fields["expires_at"])),
        )
