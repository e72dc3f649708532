# authsvc/infra/jwt/flask_jwt_token_codec.py
from __future__ import annotations

import logging
import secrets
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import ExpiredSignatureError, InvalidSignatureError, InvalidTokenError

from authsvc.services._shared.ports import Principal, TokenCodec, TokenStatus, TokenValidation

log = logging.getLogger(__name__)

ROLES_CLAIM = "roles"


@dataclass(slots=True)
class FlaskJWTTokenCodec(TokenCodec):
    """
    Adapter for Flask-JWT-Extended.

    Access tokens carry ``sub`` (account id), ``roles``, ``iat``, ``nbf`` and
    ``exp``, signed with ``JWT_SECRET_KEY`` (HS256). Refresh strings are
    opaque random values and are never JWTs.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    access_ttl: timedelta
    refresh_bytes: int = 48

    @property
    def access_ttl_ms(self) -> int:
        return self.access_ttl // timedelta(milliseconds=1)

    def mint(
        self,
        *,
        subject_id: int,
        roles: Iterable[str],
        issued_at: datetime | None = None,
    ) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        iat = issued_at or datetime.now(UTC)
        claims: dict[str, Any] = {
            ROLES_CLAIM: list(roles),
            # Explicit times override the library's "now" so callers control issuance.
            "iat": iat,
            "nbf": iat,
            "exp": iat + self.access_ttl,
        }
        return cast(
            str,
            _create_access(
                identity=str(subject_id),
                additional_claims=claims,
                expires_delta=self.access_ttl,
            ),
        )

    def validate(self, token: str) -> TokenValidation:
        from flask_jwt_extended import decode_token

        try:
            claims = cast(dict[str, Any], decode_token(token))
        except InvalidSignatureError:
            return self._reject(TokenStatus.SIGNATURE_INVALID, "signature_invalid")
        except ExpiredSignatureError:
            return self._reject(TokenStatus.EXPIRED, "expired")
        except (InvalidTokenError, JWTExtendedException, ValueError):
            return self._reject(TokenStatus.MALFORMED, "malformed")

        roles = claims.get(ROLES_CLAIM)
        subject_id = self._parse_subject(claims.get("sub"))
        if not isinstance(roles, list) or subject_id is None:
            return self._reject(TokenStatus.MALFORMED, "invalid_claims")

        principal = Principal(
            subject_id=subject_id,
            roles=tuple(str(r) for r in roles),
        )
        return TokenValidation(status=TokenStatus.VALID, principal=principal)

    def mint_refresh_opaque(self) -> str:
        return secrets.token_urlsafe(self.refresh_bytes)

    # -------------------- helpers --------------------

    @staticmethod
    def _reject(status: TokenStatus, reason: str) -> TokenValidation:
        log.info("access token rejected", extra={"reason": reason})
        return TokenValidation(status=status)

    @staticmethod
    def _parse_subject(subject: Any) -> int | None:
        """Return the account id encoded in ``sub``, or ``None`` if it is not one."""
        if isinstance(subject, str) and subject.isdecimal() and subject == str(int(subject)):
            return int(subject)
        return None
