"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from authsvc.core.logger import JSONFormatter, configure_logging


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("INFO")


def test_json_formatter_copies_known_extras() -> None:
    record = logging.LogRecord(
        name="authsvc.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="access token rejected",
        args=(),
        exc_info=None,
    )
    record.reason = "expired"
    record.subject_id = 7
    record.request_id = "req-1"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "access token rejected"
    assert payload["level"] == "INFO"
    assert payload["reason"] == "expired"
    assert payload["subject_id"] == 7
    assert payload["request_id"] == "req-1"


def test_response_carries_request_id(client) -> None:
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})

    assert resp.headers["X-Request-ID"] == "abc-123"


def test_each_request_gets_its_own_id(client) -> None:
    first = client.get("/api/v1/health").headers["X-Request-ID"]
    second = client.get("/api/v1/health").headers["X-Request-ID"]

    assert first
    assert second
    assert first != second


def test_caller_id_does_not_leak_into_next_request(client) -> None:
    client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})

    resp = client.get("/api/v1/health")

    assert resp.headers["X-Request-ID"] != "abc-123"


def test_problem_body_uses_request_id(client) -> None:
    resp = client.get("/api/v1/users/me", headers={"X-Correlation-ID": "corr-9"})

    assert resp.status_code == 401
    assert resp.get_json()["request_id"] == "corr-9"
    assert resp.headers["X-Request-ID"] == "corr-9"
