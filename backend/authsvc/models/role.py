"""Role model: the finite, pre-seeded set of capability tags."""

from __future__ import annotations

import enum

from sqlalchemy import Column, Enum, ForeignKey, Table
from sqlalchemy.orm import Mapped, mapped_column

from authsvc.core.extensions import db

from .base import PKMixin, ReprMixin


class RoleName(str, enum.Enum):
    """Known role names. New roles are added by migration + seed, never by users."""

    ROLE_USER = "ROLE_USER"
    ROLE_ADMIN = "ROLE_ADMIN"


# Association table between users and roles (composite PK, cascade on user delete)
user_roles = Table(
    "user_roles",
    db.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(PKMixin, ReprMixin, db.Model):
    """
    Named capability tag referenced by users.

    Fields
    ------
    name : RoleName
        Unique role identifier embedded into access-token claims.
    """

    __tablename__ = "roles"
    __repr_attr__ = "name"

    name: Mapped[RoleName] = mapped_column(
        Enum(RoleName, name="role_name", native_enum=False, length=20),
        nullable=False,
        unique=True,
    )
