"""CORS configuration helper."""

from __future__ import annotations

import logging

from flask import Flask
from flask_cors import CORS

log = logging.getLogger(__name__)


def init_app(app: Flask) -> None:
    """Configure CORS for every path based on application config.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS`` and ``CORS_MAX_AGE`` settings are
        consulted. When ``CORS_ORIGINS`` is blank or ``"*"`` (the default) the
        policy allows any origin on all paths but disables credential support.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "*") or ""
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]

    if wildcard and not app.config.get("TESTING"):
        log.warning("CORS allows all origins on all paths; set CORS_ORIGINS to restrict.")

    CORS(
        app,
        resources={r"/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
        expose_headers=["Location", "X-Request-ID"],
    )
