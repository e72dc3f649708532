"""User profile endpoints."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint

from authsvc.api.deps import get_user_service, json_response, require_auth, timing
from authsvc.schemas import UserProfileSchema
from authsvc.services._shared.ports import Principal

bp = Blueprint("users", __name__, url_prefix="/users")

profile_schema = UserProfileSchema()


@bp.get("/me")
@require_auth
@timing
def get_me(*, principal: Principal):
    """Return the authenticated account's profile."""

    profile = get_user_service().get_me(principal)
    return json_response({"data": profile_schema.dump(asdict(profile))})


@bp.get("/<string:username>")
@require_auth
@timing
def get_user(username: str, *, principal: Principal):
    """Return the profile for ``username``."""

    profile = get_user_service().get_profile(principal, username)
    return json_response({"data": profile_schema.dump(asdict(profile))})
