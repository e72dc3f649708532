"""JSON logging for authsvc, correlated by a per-request id.

Every record carries ``request_id``; credential events add ``subject_id`` or
``reason`` through ``extra=`` and those keys are rendered as top-level fields.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")
_G_KEY = "request_id"

EXTRA_KEYS = ("endpoint", "elapsed_ms", "reason", "subject_id")


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update({key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp records emitted inside a request with its correlation id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _incoming_request_id() -> str:
    for header in CORRELATION_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return str(uuid4())


def ensure_request_id() -> str:
    """
    Return the id of the current request, resolving it on first use.

    The caller's ``X-Request-ID``/``X-Correlation-ID`` wins; otherwise a UUID4
    is generated. Outside a request a throwaway UUID4 is returned.
    """
    if not has_request_context():
        return str(uuid4())
    request_id = g.get(_G_KEY)
    if request_id is None:
        request_id = _incoming_request_id()
        setattr(g, _G_KEY, request_id)
    return request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Send root logging to stdout as JSON at ``level``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else level.upper()
    root.setLevel(level)


def init_app(app: Flask) -> None:
    """Assign each request its own id and echo it in ``X-Request-ID``."""
    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _begin_request() -> None:
        # ``g`` outlives the request when an app context was pushed beforehand.
        g.pop(_G_KEY, None)
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = ["JSONFormatter", "configure_logging", "ensure_request_id", "init_app"]
