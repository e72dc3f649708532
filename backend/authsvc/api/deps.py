"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, jsonify, request

from authsvc.core.errors import Unauthorized
from authsvc.infra import providers
from authsvc.services.auth.dto import AuthTokenConfig
from authsvc.services.auth.service import AuthService
from authsvc.services.users.service import UserService

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "Bearer "
AUTH_SERVICE_KEY = "authsvc.auth_service"


def get_auth_service() -> AuthService:
    """Return the app-wide :class:`AuthService`, built on first use."""

    service = current_app.extensions.get(AUTH_SERVICE_KEY)
    if service is None:
        service = AuthService(
            token_codec=providers.token_codec(),
            refresh_store=providers.refresh_store(),
            password_hasher=providers.password_hasher(),
            cfg=AuthTokenConfig.from_mapping(current_app.config),
        )
        current_app.extensions[AUTH_SERVICE_KEY] = service
    return cast(AuthService, service)


def get_user_service() -> UserService:
    return UserService()


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        raise Unauthorized("Missing bearer token")
    token = header[len(BEARER_PREFIX) :].strip()
    if not token:
        raise Unauthorized("Missing bearer token")
    return token


def require_auth(func: F) -> F:
    """Validate the Bearer access token and pass its principal to the view.

    The wrapped view receives the resolved
    :class:`~authsvc.services._shared.ports.Principal` as the ``principal``
    keyword argument; nothing is stored in request-global state.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        result = providers.token_codec().validate(_bearer_token())
        kwargs["principal"] = result.raise_for_status()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
