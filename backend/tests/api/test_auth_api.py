"""HTTP tests for the authentication and profile endpoints."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

SIGNUP = "/api/v1/auth/signup"
SIGNIN = "/api/v1/auth/signin"
REFRESH = "/api/v1/auth/refresh"


def _signup(client, **overrides):
    payload = {"name": "Alice", "username": "alice", "email": "alice@x.com", "password": "pw1"}
    payload.update(overrides)
    return client.post(SIGNUP, json=payload)


def _signin(client, who="alice", password="pw1"):
    return client.post(SIGNIN, json={"username_or_email": who, "password": password})


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def tokens(client, default_role):
    assert _signup(client).status_code == 201
    return _signin(client).get_json()["data"]


# --------------------------------- signup --------------------------------- #
def test_signup_returns_201_with_location(client, default_role):
    resp = _signup(client)

    assert resp.status_code == 201
    assert resp.get_json() == {"success": True, "message": "User registered successfully"}
    assert resp.headers["Location"].endswith("/api/v1/users/alice")


def test_signup_duplicate_username_is_409(client, default_role):
    _signup(client)

    resp = _signup(client, email="other@x.com", password="pw2")

    assert resp.status_code == 409
    body = resp.get_json()
    assert resp.mimetype == "application/problem+json"
    assert body["detail"] == "Username is already taken!"
    assert body["success"] is False


def test_signup_duplicate_email_is_409(client, default_role):
    _signup(client)

    resp = _signup(client, username="alice2")

    assert resp.status_code == 409
    assert resp.get_json()["detail"] == "Email Address already in use!"


def test_signup_without_role_is_500_configuration_error(client):
    resp = _signup(client)

    assert resp.status_code == 500
    body = resp.get_json()
    assert body["code"] == "configuration_error"
    assert body["detail"] == "User Role not set."


def test_signup_schema_violation_is_422(client, default_role):
    resp = client.post(SIGNUP, json={"username": "al"})

    assert resp.status_code == 422
    body = resp.get_json()
    assert body["code"] == "validation_error"
    errors = body["details"]["errors"]
    assert {"name", "email", "password", "username"} <= set(errors)


# --------------------------------- signin --------------------------------- #
def test_signin_returns_token_pair(app, tokens):
    assert tokens["token_type"] == "Bearer"
    assert tokens["expires_in_ms"] == app.config["ACCESS_TOKEN_TTL_MS"]
    assert tokens["access_token"].count(".") == 2
    assert tokens["refresh_token"]


def test_signin_failures_look_identical(client, default_role):
    _signup(client)

    wrong = _signin(client, password="nope")
    unknown = _signin(client, who="mallory")

    assert wrong.status_code == unknown.status_code == 401
    strip = lambda body: {k: v for k, v in body.items() if k != "request_id"}  # noqa: E731
    assert strip(wrong.get_json()) == strip(unknown.get_json())


# --------------------------------- refresh -------------------------------- #
def test_refresh_returns_same_refresh_token(client, tokens):
    resp = client.post(REFRESH, json={"refresh_token": tokens["refresh_token"]})

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["refresh_token"] == tokens["refresh_token"]
    assert data["access_token"]


def test_refresh_unknown_token_is_400(client):
    resp = client.post(REFRESH, json={"refresh_token": "nope"})

    assert resp.status_code == 400
    assert resp.get_json()["detail"] == "Invalid Refresh Token"


def test_refresh_expired_token_is_400(app, client, session, default_role):
    from authsvc.infra import providers

    _signup(client)
    user_id = client.get(
        "/api/v1/users/me", headers=_bearer(_signin(client).get_json()["data"]["access_token"])
    ).get_json()["data"]["id"]
    providers.refresh_store().save(
        token="stale", user_id=user_id, expires_at=datetime.now(UTC) - timedelta(minutes=1)
    )

    resp = client.post(REFRESH, json={"refresh_token": "stale"})

    assert resp.status_code == 400
    assert resp.get_json()["detail"] == "Refresh Token expired"


# --------------------------------- users ---------------------------------- #
def test_me_requires_bearer_token(client):
    resp = client.get("/api/v1/users/me")

    assert resp.status_code == 401


def test_me_returns_profile(client, tokens):
    resp = client.get("/api/v1/users/me", headers=_bearer(tokens["access_token"]))

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["username"] == "alice"
    assert data["email"] == "alice@x.com"
    assert data["roles"] == ["ROLE_USER"]


def test_location_header_resolves(client, default_role):
    location = _signup(client).headers["Location"]
    access = _signin(client).get_json()["data"]["access_token"]

    resp = client.get(location, headers=_bearer(access))

    assert resp.status_code == 200
    assert resp.get_json()["data"]["username"] == "alice"


def test_unknown_profile_is_404(client, tokens):
    resp = client.get("/api/v1/users/ghost", headers=_bearer(tokens["access_token"]))

    assert resp.status_code == 404


def test_tampered_token_is_401(client, tokens):
    header, payload, signature = tokens["access_token"].split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

    resp = client.get("/api/v1/users/me", headers=_bearer(f"{header}.{payload}.{flipped}"))

    assert resp.status_code == 401
    assert resp.get_json()["detail"] == "Unauthorized"


# --------------------------------- health --------------------------------- #
def test_health(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["db"] == "ok"
