"""User model: the account identity that credentials authenticate."""

from __future__ import annotations

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from authsvc.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin
from .role import Role, user_roles


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account identity with its role set.

    Identity fields (``name``, ``username``, ``email``) are immutable after
    creation; only ``password_hash`` and ``roles`` may change. Hashing is
    performed by the password hasher port, never by the model.

    Fields
    ------
    name : str
        Display name.
    username : str
        Public handle. Unique per system.
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    password_hash : str
        Salted one-way hash of the password.
    roles : set[Role]
        Capability tags embedded into access-token claims.
    """

    __tablename__ = "users"
    __repr_attr__ = "username"

    name: Mapped[str] = mapped_column(String(40), nullable=False)
    username: Mapped[str] = mapped_column(String(15), nullable=False)
    email: Mapped[str] = mapped_column(String(40), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    roles: Mapped[set[Role]] = relationship(
        Role,
        secondary=user_roles,
        collection_class=set,
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    @property
    def role_names(self) -> list[str]:
        """Return sorted role names, as embedded into token claims."""
        return sorted(role.name.value for role in self.roles)

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """Trim the username and reject blanks."""
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip()
