"""Password hashing backed by :mod:`werkzeug.security`."""

from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from authsvc.services._shared.ports import PasswordHasher


@dataclass(slots=True)
class WerkzeugPasswordHasher(PasswordHasher):
    """
    Salted one-way hashing via Werkzeug (``scrypt`` by default).

    The encoded hash embeds method, salt and digest, so :meth:`verify` needs
    no extra parameters and keeps working if ``method`` changes later.
    """

    method: str = "scrypt"
    salt_length: int = 16

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self.method, salt_length=self.salt_length)

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return check_password_hash(hashed, plaintext)
        except ValueError:
            # Unknown method or malformed encoding
            return False
