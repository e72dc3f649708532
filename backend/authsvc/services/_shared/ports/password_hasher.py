from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for a slow, salted, one-way password hash."""

    def hash(self, plaintext: str) -> str:
        """Return an encoded hash embedding algorithm, salt and digest."""

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Return ``True`` on match; ``False`` on mismatch or malformed hash."""
