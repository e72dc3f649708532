"""User repository: account lookups and uniqueness checks."""

from __future__ import annotations

from sqlalchemy import or_

from authsvc.models.user import User
from authsvc.repositories.base import BaseRepository


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    This repository focuses on safe lookup and uniqueness probes.
    It NEVER hashes passwords or issues tokens.
    """

    model = User

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by exact (trimmed) username."""
        return self.find_one(User.username == username.strip())

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        return self.find_one(User.email == _normalize_email(email))

    def get_by_username_or_email(self, username_or_email: str) -> User | None:
        """Resolve a sign-in identifier that may be a username or an email.

        :param username_or_email: Raw identifier typed by the user.
        :type username_or_email: str
        :returns: Matching user or ``None``.
        :rtype: User | None
        """
        raw = username_or_email.strip()
        return self.find_one(or_(User.username == raw, User.email == _normalize_email(raw)))

    def exists_by_username(self, username: str) -> bool:
        """Return ``True`` when the username is already taken."""
        return self.exists(User.username == username.strip())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        return self.exists(User.email == _normalize_email(email))
