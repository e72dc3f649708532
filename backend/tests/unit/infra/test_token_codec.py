"""Unit tests for the flask-jwt-extended token codec."""

from __future__ import annotations

import base64
from datetime import UTC, datetime, timedelta

import pytest
from authsvc.infra.jwt import FlaskJWTTokenCodec
from authsvc.services._shared.errors import (
    MalformedTokenError,
    SignatureInvalidError,
    TokenExpiredError,
)
from authsvc.services._shared.ports import Principal, TokenStatus
from flask_jwt_extended import decode_token


def _flip_signature_bit(token: str) -> str:
    """Flip the first bit of the decoded signature and re-encode it."""
    header, payload, signature = token.split(".")
    raw = bytearray(base64.urlsafe_b64decode(signature + "=" * (-len(signature) % 4)))
    raw[0] ^= 0x01
    tampered = base64.urlsafe_b64encode(bytes(raw)).rstrip(b"=").decode()
    return f"{header}.{payload}.{tampered}"


@pytest.fixture()
def codec(app) -> FlaskJWTTokenCodec:
    return FlaskJWTTokenCodec(access_ttl=timedelta(minutes=5), refresh_bytes=48)


def test_round_trip_returns_subject_and_roles(codec):
    token = codec.mint(subject_id=42, roles=["ROLE_USER", "ROLE_ADMIN"])

    result = codec.validate(token)

    assert result.status is TokenStatus.VALID
    assert result.principal == Principal(subject_id=42, roles=("ROLE_USER", "ROLE_ADMIN"))
    assert result.raise_for_status() == result.principal


def test_claims_follow_issued_at(codec):
    issued_at = datetime.now(UTC).replace(microsecond=0)

    claims = decode_token(codec.mint(subject_id=7, roles=[], issued_at=issued_at))

    assert claims["sub"] == "7"
    assert claims["iat"] == claims["nbf"] == int(issued_at.timestamp())
    assert claims["exp"] - claims["iat"] == 300
    assert claims["type"] == "access"


def test_access_ttl_ms(codec):
    assert codec.access_ttl_ms == 300_000


def test_expired_token_is_expired_not_signature_invalid(codec):
    issued_at = datetime.now(UTC) - timedelta(minutes=10)
    token = codec.mint(subject_id=1, roles=["ROLE_USER"], issued_at=issued_at)

    result = codec.validate(token)

    assert result.status is TokenStatus.EXPIRED
    assert result.principal is None
    with pytest.raises(TokenExpiredError):
        result.raise_for_status()


def test_flipped_signature_bit_is_signature_invalid(codec):
    token = codec.mint(subject_id=1, roles=["ROLE_USER"])

    result = codec.validate(_flip_signature_bit(token))

    assert result.status is TokenStatus.SIGNATURE_INVALID
    with pytest.raises(SignatureInvalidError):
        result.raise_for_status()


def test_expired_and_tampered_reports_signature_first(codec):
    issued_at = datetime.now(UTC) - timedelta(minutes=10)
    token = codec.mint(subject_id=1, roles=[], issued_at=issued_at)

    assert codec.validate(_flip_signature_bit(token)).status is TokenStatus.SIGNATURE_INVALID


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c", "Bearer x.y.z"])
def test_garbage_is_malformed(codec, garbage):
    result = codec.validate(garbage)

    assert result.status is TokenStatus.MALFORMED
    with pytest.raises(MalformedTokenError):
        result.raise_for_status()


def test_token_signed_with_another_key_is_signature_invalid(app, codec):
    token = codec.mint(subject_id=1, roles=[])
    original = app.config["JWT_SECRET_KEY"]
    app.config["JWT_SECRET_KEY"] = "a-completely-different-key-of-decent-length-1"
    try:
        result = codec.validate(token)
    finally:
        app.config["JWT_SECRET_KEY"] = original

    assert result.status is TokenStatus.SIGNATURE_INVALID


def test_failure_reason_is_logged(codec, caplog):
    caplog.set_level("INFO", logger="authsvc.infra.jwt.flask_jwt_token_codec")

    codec.validate("not-a-token")

    assert any(getattr(r, "reason", None) == "malformed" for r in caplog.records)


def test_refresh_opaque_strings_are_random_and_url_safe(codec):
    tokens = {codec.mint_refresh_opaque() for _ in range(50)}

    assert len(tokens) == 50
    for token in tokens:
        assert len(token) == 64  # 48 bytes -> 64 base64url chars
        assert set(token) <= set(
            "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
        )


@pytest.mark.parametrize("subject_id", [0, 7, 2**40])
def test_round_trip_preserves_integer_subject(codec, subject_id):
    result = codec.validate(codec.mint(subject_id=subject_id, roles=["ROLE_USER"]))

    assert result.principal.subject_id == subject_id
    assert type(result.principal.subject_id) is int


@pytest.mark.parametrize("sub", ["007", "alice", "-1", "1.5"])
def test_non_canonical_subject_is_malformed(codec, sub):
    from flask_jwt_extended import create_access_token

    token = create_access_token(identity=sub, additional_claims={"roles": ["ROLE_USER"]})

    result = codec.validate(token)

    assert result.status is TokenStatus.MALFORMED
    assert result.principal is None
