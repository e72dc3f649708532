# authsvc/services/_shared/base.py
from __future__ import annotations

import logging
from datetime import UTC, datetime

from authsvc.core import errors as api_errors
from authsvc.services._shared.errors import (
    BadRequestError,
    ConfigurationError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ServiceError,
    TokenInvalidError,
)
from authsvc.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

log = logging.getLogger(__name__)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation.
    * Provide a single UTC clock so tests can pin "now".

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Services hold no mutable state; the authenticated principal, when
      needed, is passed explicitly to each call.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, enforce_db_readonly: bool = True) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param enforce_db_readonly: Apply `SET TRANSACTION READ ONLY` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=enforce_db_readonly)

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be rendered.
        :rtype: Exception
        """
        if isinstance(exc, InvalidCredentialsError):
            return api_errors.Unauthorized(str(exc))

        if isinstance(exc, TokenInvalidError):
            # Reasons stay distinct in logs but collapse to one client message.
            return api_errors.Unauthorized("Unauthorized")

        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))

        if isinstance(exc, ConfigurationError):
            log.error("Configuration error surfaced to client: %s", exc)
            return api_errors.ServerMisconfigured(str(exc))

        if isinstance(exc, BadRequestError):
            return api_errors.BadRequest(str(exc))

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.BadRequest(str(exc))

        return exc
