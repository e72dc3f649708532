"""``flask`` sub-commands shipped with authsvc."""

from __future__ import annotations

from flask import Flask

from .seed import seed_cli

COMMANDS = (seed_cli,)


def init_app(app: Flask) -> None:
    """Expose ``flask seed ...`` (role provisioning) on ``app.cli``."""
    for command in COMMANDS:
        app.cli.add_command(command)
