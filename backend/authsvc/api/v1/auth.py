"""Authentication endpoints using the service layer."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, request, url_for

from authsvc.api.deps import get_auth_service, json_response, timing
from authsvc.schemas import (
    ApiResponseSchema,
    RefreshSchema,
    SignInSchema,
    SignUpSchema,
    TokenPairSchema,
)
from authsvc.services.auth.dto import RefreshIn, SignInIn, SignUpIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

signin_schema = SignInSchema()
signup_schema = SignUpSchema()
refresh_schema = RefreshSchema()
token_schema = TokenPairSchema()
api_response_schema = ApiResponseSchema()


@bp.post("/signin")
@timing
def signin():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = signin_schema.load(request.get_json(silent=True) or {})
    pair = get_auth_service().sign_in(SignInIn(**data))
    return json_response({"data": token_schema.dump(asdict(pair))})


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new access token (same refresh string)."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    pair = get_auth_service().refresh(RefreshIn(**data))
    return json_response({"data": token_schema.dump(asdict(pair))})


@bp.post("/signup")
@timing
def signup():
    """Register a new account and point to its profile."""

    data = signup_schema.load(request.get_json(silent=True) or {})
    created = get_auth_service().sign_up(SignUpIn(**data))
    body = api_response_schema.dump({"success": True, "message": "User registered successfully"})
    response = json_response(body, status=201)
    response.headers["Location"] = url_for(
        "users.get_user", username=created.username, _external=True
    )
    return response
