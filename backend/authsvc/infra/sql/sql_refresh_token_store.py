"""Refresh-token persistence in the relational database."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from authsvc.models.refresh_token import RefreshToken
from authsvc.services._shared.errors import ConflictError
from authsvc.services._shared.ports import RefreshTokenRecord, RefreshTokenStore, as_utc
from authsvc.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


class SQLRefreshTokenStore(RefreshTokenStore):
    """
    SQLAlchemy-backed refresh token store.

    Each call runs in its own Unit of Work, so a saved token is committed
    before it is handed to the client. Uniqueness is enforced by the primary
    key on ``refresh_tokens.token``.
    """

    def save(self, *, token: str, user_id: int, expires_at: datetime) -> RefreshTokenRecord:
        expires_at = as_utc(expires_at)
        try:
            with SQLAlchemyUnitOfWork() as uow:
                # Identity-map hit would raise on flush; report it as a collision instead.
                if uow.refresh_tokens.get(token) is not None:
                    raise ConflictError("RefreshToken", "Refresh token already exists")
                uow.refresh_tokens.add(
                    RefreshToken(token=token, user_id=user_id, expires_at=expires_at)
                )
        except IntegrityError as exc:
            log.warning("refresh token insert collided", extra={"subject_id": user_id})
            raise ConflictError("RefreshToken", "Refresh token already exists") from exc
        return RefreshTokenRecord(token=token, user_id=user_id, expires_at=expires_at)

    def find_by_token(self, token: str) -> RefreshTokenRecord | None:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            row = uow.refresh_tokens.get(token)
            if row is None:
                return None
            return RefreshTokenRecord(
                token=row.token,
                user_id=row.user_id,
                expires_at=as_utc(row.expires_at),
            )
