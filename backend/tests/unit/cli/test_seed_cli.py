"""Tests for the ``flask seed`` command group."""

from __future__ import annotations

from sqlalchemy import select

from authsvc.models.role import Role, RoleName


def test_seed_roles_creates_every_role(app, session):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed", "roles"])

    assert result.exit_code == 0, result.output
    assert "Seed summary:" in result.output
    names = set(session.execute(select(Role.name)).scalars())
    assert names == set(RoleName)


def test_seed_roles_is_idempotent(app, session):
    runner = app.test_cli_runner()
    runner.invoke(args=["seed", "roles"])

    result = runner.invoke(args=["seed", "--verbose", "roles"])

    assert result.exit_code == 0, result.output
    assert f"existing={len(RoleName):>2}" in result.output
    assert "created= 0" in result.output
