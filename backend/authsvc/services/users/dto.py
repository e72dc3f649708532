from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Profile view of an account.

    :param id: Account id.
    :param username: Public handle.
    :param name: Display name.
    :param roles: Sorted role names.
    :param created_at: Registration timestamp.
    :param email: Only populated for the account owner or an admin.
    """

    id: int
    username: str
    name: str
    roles: tuple[str, ...]
    created_at: datetime | None = None
    email: str | None = None
