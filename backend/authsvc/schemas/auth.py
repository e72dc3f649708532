"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class SignInSchema(Schema):
    """Input payload for authenticating a user by username or email."""

    username_or_email = fields.String(required=True, validate=validate.Length(min=1, max=40))
    password = fields.String(required=True, validate=validate.Length(min=1, max=100))


class SignUpSchema(Schema):
    """Input payload for account registration."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=40))
    username = fields.String(required=True, validate=validate.Length(min=3, max=15))
    email = fields.Email(required=True, validate=validate.Length(max=40))
    password = fields.String(required=True, validate=validate.Length(min=1, max=100))


class RefreshSchema(Schema):
    """Input payload for exchanging a refresh token."""

    refresh_token = fields.String(required=True, validate=validate.Length(min=1, max=128))


class TokenPairSchema(Schema):
    """Response payload containing the access/refresh pair."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    token_type = fields.String(dump_default="Bearer")
    expires_in_ms = fields.Integer(required=True)


class ApiResponseSchema(Schema):
    """Plain success/message envelope."""

    success = fields.Boolean(required=True)
    message = fields.String(required=True)
