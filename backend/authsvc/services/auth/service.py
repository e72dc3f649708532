# authsvc/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from authsvc.models.user import User
from authsvc.repositories.user import UserRepository
from authsvc.services._shared.base import BaseService
from authsvc.services._shared.errors import (
    BadRequestError,
    ConfigurationError,
    ConflictError,
    InvalidCredentialsError,
    violates,
)
from authsvc.services._shared.ports import PasswordHasher, RefreshTokenStore, TokenCodec
from authsvc.services.auth.dto import (
    AuthTokenConfig,
    RefreshIn,
    SignInIn,
    SignUpIn,
    SignUpOut,
    TokenPairOut,
)

log = logging.getLogger(__name__)

USERNAME_TAKEN = "Username is already taken!"
EMAIL_TAKEN = "Email Address already in use!"
INVALID_REFRESH = "Invalid Refresh Token"
EXPIRED_REFRESH = "Refresh Token expired"

# (min, max) lengths after trimming
NAME_LEN = (1, 40)
USERNAME_LEN = (3, 15)
EMAIL_MAX_LEN = 40
PASSWORD_LEN = (1, 100)


class AuthService(BaseService):
    """
    Credential lifecycle service (sign-in / refresh / sign-up).

    Access tokens are minted through a pluggable :class:`TokenCodec`; opaque
    refresh strings are persisted in a :class:`RefreshTokenStore` and exchanged
    as-is (no rotation). Passwords are verified and hashed through a
    :class:`PasswordHasher`.

    The service holds no per-request state; every call is independent.
    """

    def __init__(
        self,
        *,
        token_codec: TokenCodec,
        refresh_store: RefreshTokenStore,
        password_hasher: PasswordHasher,
        cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_codec: Adapter minting/validating access tokens.
        :param refresh_store: Durable refresh-token store.
        :param password_hasher: One-way password hasher.
        :param cfg: Refresh lifetime, retry count and account defaults.
        """
        super().__init__()
        self.tokens = token_codec
        self.refresh_store = refresh_store
        self.hasher = password_hasher
        self.cfg = cfg or AuthTokenConfig()
        # Verified against when the account is unknown, to keep timing uniform.
        self._dummy_hash = self.hasher.hash("not-a-real-password")

    # ------------------------------------------------------------------ #
    # Sign-in
    # ------------------------------------------------------------------ #

    def sign_in(self, dto: SignInIn) -> TokenPairOut:
        """
        Authenticate credentials and issue an access/refresh pair.

        :param dto: Sign-in input.
        :returns: Token pair; ``expires_in_ms`` equals the access TTL.
        :raises InvalidCredentialsError: Unknown account or wrong password
            (same message in both cases).
        """
        if not dto.username_or_email or not dto.password:
            raise InvalidCredentialsError()

        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_username_or_email(dto.username_or_email)
            if user is None:
                self.hasher.verify(dto.password, self._dummy_hash)
                log.info("sign-in rejected: unknown account")
                raise InvalidCredentialsError()
            if not self.hasher.verify(dto.password, user.password_hash):
                log.info("sign-in rejected: bad password", extra={"subject_id": user.id})
                raise InvalidCredentialsError()
            # Snapshot before the read-only scope rolls back and expires the instance.
            user_id = user.id
            roles = user.role_names

        access = self.tokens.mint(subject_id=user_id, roles=roles, issued_at=self.now_utc())
        refresh = self._issue_refresh_token(user_id)
        log.info("sign-in succeeded", extra={"subject_id": user_id})
        return self._pair(access, refresh)

    def _issue_refresh_token(self, user_id: int) -> str:
        """Persist a fresh opaque string, retrying on the (unlikely) collision."""
        attempts = max(1, self.cfg.save_attempts)
        expires_at = self.now_utc() + self.cfg.refresh_expires
        for attempt in range(1, attempts + 1):
            token = self.tokens.mint_refresh_opaque()
            try:
                self.refresh_store.save(token=token, user_id=user_id, expires_at=expires_at)
                return token
            except ConflictError:
                if attempt == attempts:
                    raise
                log.warning(
                    "refresh token collision, retrying (%d/%d)",
                    attempt,
                    attempts,
                    extra={"subject_id": user_id},
                )
        raise AssertionError("unreachable")  # pragma: no cover

    # ------------------------------------------------------------------ #
    # Refresh (no rotation)
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange a stored refresh token for a new access token.

        The same refresh string is returned unchanged.

        :raises BadRequestError: Unknown token, unknown owner, or (when
            enforced) an expired record.
        """
        if not dto.refresh_token:
            raise BadRequestError(INVALID_REFRESH)

        record = self.refresh_store.find_by_token(dto.refresh_token)
        if record is None:
            raise BadRequestError(INVALID_REFRESH)

        if self.cfg.enforce_refresh_expiry and record.is_expired(self.now_utc()):
            log.info("refresh rejected: expired", extra={"subject_id": record.user_id})
            raise BadRequestError(EXPIRED_REFRESH)

        with self.ro_uow() as uow:
            user = uow.users.get(record.user_id)
            if user is None:
                raise BadRequestError(INVALID_REFRESH)
            user_id = user.id
            roles = user.role_names

        access = self.tokens.mint(subject_id=user_id, roles=roles, issued_at=self.now_utc())
        return self._pair(access, record.token)

    # ------------------------------------------------------------------ #
    # Sign-up
    # ------------------------------------------------------------------ #

    def sign_up(self, dto: SignUpIn) -> SignUpOut:
        """
        Register an account carrying the configured default role.

        :param dto: Sign-up input.
        :returns: Identity of the created account.
        :raises BadRequestError: Invalid input.
        :raises ConflictError: Username or email already taken (also when a
            concurrent insert wins the unique constraint).
        :raises ConfigurationError: Default role is not provisioned.
        """
        self._validate_sign_up(dto)

        try:
            with self.rw_uow() as uow:
                if uow.users.exists_by_username(dto.username):
                    raise ConflictError("User", USERNAME_TAKEN)
                if uow.users.exists_by_email(dto.email):
                    raise ConflictError("User", EMAIL_TAKEN)

                password_hash = self.hasher.hash(dto.password)

                try:
                    role = uow.roles.find_by_name(self.cfg.default_role)
                except ValueError:
                    role = None
                if role is None:
                    log.error("default role %r is not provisioned", self.cfg.default_role)
                    raise ConfigurationError("User Role not set.")

                user = User(
                    name=dto.name.strip(),
                    username=dto.username,
                    email=dto.email,
                    password_hash=password_hash,
                )
                user.roles = {role}
                uow.users.add(user)
                out = SignUpOut(user_id=user.id, username=user.username)
        except IntegrityError as exc:
            raise self._conflict_from(exc) from exc

        log.info("account registered", extra={"subject_id": out.user_id})
        return out

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _pair(self, access: str, refresh: str) -> TokenPairOut:
        return TokenPairOut(
            access_token=access,
            refresh_token=refresh,
            expires_in_ms=self.tokens.access_ttl_ms,
        )

    @staticmethod
    def _conflict_from(exc: IntegrityError) -> ConflictError:
        if violates(exc, "uq_users_email") or violates(exc, "users.email"):
            return ConflictError("User", EMAIL_TAKEN)
        if violates(exc, "uq_users_username") or violates(exc, "users.username"):
            return ConflictError("User", USERNAME_TAKEN)
        return ConflictError("User", "Account already exists")

    @staticmethod
    def _validate_sign_up(dto: SignUpIn) -> None:
        """
        Check presence, length limits and basic email shape.

        :raises BadRequestError: On the first violated rule.
        """

        def _check_len(field: str, value: str, lo: int, hi: int) -> None:
            if not lo <= len(value) <= hi:
                raise BadRequestError(f"{field} must be between {lo} and {hi} characters")

        for field in ("name", "username", "email", "password"):
            value = getattr(dto, field)
            if not isinstance(value, str) or not value.strip():
                raise BadRequestError(f"{field} is required")

        _check_len("name", dto.name.strip(), *NAME_LEN)
        _check_len("username", dto.username.strip(), *USERNAME_LEN)
        _check_len("password", dto.password, *PASSWORD_LEN)

        email = dto.email.strip()
        if len(email) > EMAIL_MAX_LEN:
            raise BadRequestError(f"email must be at most {EMAIL_MAX_LEN} characters")
        local, _, domain = email.partition("@")
        if not local or "." not in domain or domain.startswith(".") or domain.endswith("."):
            raise BadRequestError("email is not a valid address")
