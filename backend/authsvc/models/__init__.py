from authsvc.models.refresh_token import RefreshToken
from authsvc.models.role import Role, RoleName, user_roles
from authsvc.models.user import User

__all__ = [
    "RefreshToken",
    "Role",
    "RoleName",
    "User",
    "user_roles",
]
