"""The Alembic revisions build the same tables the models declare."""

from __future__ import annotations

from flask_migrate import downgrade, upgrade
from sqlalchemy import inspect

from authsvc.core.config import TestingConfig
from authsvc.core.extensions import db
from authsvc.factory import create_app

AUTH_TABLES = {"users", "roles", "user_roles", "refresh_tokens"}


def test_upgrade_and_downgrade(tmp_path):
    class MigrationConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'auth.db'}"

    app = create_app(MigrationConfig)

    with app.app_context():
        upgrade()
        inspector = inspect(db.engine)
        created = set(inspector.get_table_names())
        user_uniques = {uc["name"] for uc in inspector.get_unique_constraints("users")}

        downgrade(revision="base")
        remaining = set(inspect(db.engine).get_table_names())

    assert AUTH_TABLES <= created
    assert created - {"alembic_version"} == set(db.metadata.tables)
    assert {"uq_users_username", "uq_users_email"} <= user_uniques
    assert not AUTH_TABLES & remaining
