"""Factory Boy definition for :class:`authsvc.models.role.Role`."""

from __future__ import annotations

from authsvc.models.role import Role, RoleName

from tests.factories import BaseFactory


class RoleFactory(BaseFactory):
    """Build persisted roles; repeated names resolve to the same row."""

    class Meta:
        model = Role
        sqlalchemy_get_or_create = ("name",)

    name = RoleName.ROLE_USER
