"""Build the authsvc Flask application."""

from __future__ import annotations

from flask import Flask

from authsvc.core.config import BaseConfig, get_config
from authsvc.core.logger import configure_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """
    Create an app serving ``/api/v1/auth``, ``/api/v1/users`` and ``/api/v1/health``.

    :param config: Config object or import path; defaults to the class chosen
        by ``APP_ENV``.
    :param instance_config_filename: Optional ``instance/`` override file.
    :raises RuntimeError: ``REDIS_URL`` is unreachable, or
        ``REFRESH_TOKEN_STORE`` names an unknown backend.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)
    app.config.from_object(config if config is not None else get_config())
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from authsvc import api, cli
    from authsvc.core import cors, errors, extensions, logger
    from authsvc.infra import providers

    # providers read the Redis client created by extensions
    for component in (extensions, providers, logger, cors, api, errors, cli):
        component.init_app(app)

    return app
