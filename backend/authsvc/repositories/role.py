"""Role repository."""

from __future__ import annotations

from authsvc.models.role import Role, RoleName
from authsvc.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    """Read access to the pre-seeded role set."""

    model = Role

    def find_by_name(self, name: RoleName | str) -> Role | None:
        """Return the role with the given name, or ``None`` when not provisioned.

        :raises ValueError: If ``name`` is not a known :class:`RoleName`.
        """
        return self.find_one(Role.name == RoleName(name))
