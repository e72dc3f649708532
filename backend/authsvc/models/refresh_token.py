"""Persisted refresh-token records keyed by the opaque token string."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from authsvc.core.extensions import db

from .base import CreatedAtMixin, ReprMixin
from .user import User


class RefreshToken(ReprMixin, CreatedAtMixin, db.Model):
    """
    A long-lived refresh token owned by exactly one user.

    The token string itself is the primary key, so uniqueness is enforced by
    the database. Records are read (not deleted) on exchange.
    """

    __tablename__ = "refresh_tokens"
    __repr_attr__ = "user_id"

    token: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped[User] = relationship(User, lazy="joined")
