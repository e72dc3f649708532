"""Read-only account profile use cases."""

from __future__ import annotations

from authsvc.models.role import RoleName
from authsvc.models.user import User
from authsvc.services._shared.base import BaseService
from authsvc.services._shared.errors import NotFoundError
from authsvc.services._shared.ports import Principal
from authsvc.services.users.dto import UserPublicOut


class UserService(BaseService):
    """Resolve account profiles for an explicitly passed principal."""

    def get_me(self, principal: Principal) -> UserPublicOut:
        """
        Return the profile of the authenticated account.

        :raises NotFoundError: The token subject no longer exists.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(principal.subject_id)
            if user is None:
                raise NotFoundError("User", principal.subject_id)
            return self._to_out(user, include_email=True)

    def get_profile(self, principal: Principal, username: str) -> UserPublicOut:
        """
        Return the profile for ``username``.

        Email is disclosed only to the owner or to ``ROLE_ADMIN``.

        :raises NotFoundError: Unknown username.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(username)
            if user is None:
                raise NotFoundError("User", username)
            include_email = user.id == principal.subject_id or principal.has_role(
                RoleName.ROLE_ADMIN.value
            )
            return self._to_out(user, include_email=include_email)

    @staticmethod
    def _to_out(user: User, *, include_email: bool) -> UserPublicOut:
        return UserPublicOut(
            id=user.id,
            username=user.username,
            name=user.name,
            roles=tuple(user.role_names),
            created_at=user.created_at,
            email=user.email if include_email else None,
        )
