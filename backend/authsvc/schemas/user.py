"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class UserProfileSchema(Schema):
    """Profile representation of an account; ``email`` is null when hidden."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    name = fields.String(required=True)
    roles = fields.List(fields.String(), required=True)
    created_at = fields.DateTime(allow_none=True)
    email = fields.Email(allow_none=True)
