"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases.
"""

from __future__ import annotations

import os
from datetime import timedelta

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from authsvc.core.config import TestingConfig
from authsvc.core.extensions import db as _db  # Flask-SQLAlchemy instance
from authsvc.factory import create_app  # application factory under test
from authsvc.infra.jwt import FlaskJWTTokenCodec
from authsvc.infra.security import WerkzeugPasswordHasher
from authsvc.services._shared.ports import InMemoryRefreshTokenStore
from authsvc.services.auth.dto import AuthTokenConfig
from authsvc.services.auth.service import AuthService

# Cheap hashing keeps the suite fast; production uses scrypt.
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection; automatically rolled
        back after each test.

    Notes
    -----
    The session joins the connection in ``conservative_savepoint`` mode, so
    ``commit()``/``rollback()`` issued by Units of Work only touch their own
    SAVEPOINT and the outer transaction is discarded at teardown.
    """
    # 1) Top-level transaction
    top_trans = connection.begin()

    # 2) Scoped session bound to the connection
    SessionFactory = sessionmaker(bind=connection, future=True)
    scoped = scoped_session(SessionFactory)

    # 3) SAVEPOINT per test
    nested = connection.begin_nested()

    # 4) Re-create SAVEPOINT when the previous nested transaction ends
    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    # 5) Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- Credential lifecycle components ------------------------------------------
@pytest.fixture()
def default_role(session):
    """Provision ``ROLE_USER`` the way ``flask seed roles`` does."""
    from tests.factories.role import RoleFactory

    return RoleFactory()


@pytest.fixture()
def password_hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method=FAST_HASH_METHOD)


@pytest.fixture()
def token_codec(app) -> FlaskJWTTokenCodec:
    return FlaskJWTTokenCodec(
        access_ttl=timedelta(milliseconds=app.config["ACCESS_TOKEN_TTL_MS"]),
        refresh_bytes=app.config["REFRESH_TOKEN_BYTES"],
    )


@pytest.fixture()
def refresh_store() -> InMemoryRefreshTokenStore:
    return InMemoryRefreshTokenStore()


@pytest.fixture()
def auth_service(token_codec, refresh_store, password_hasher) -> AuthService:
    """AuthService wired to the real codec and an in-memory refresh store."""
    return AuthService(
        token_codec=token_codec,
        refresh_store=refresh_store,
        password_hasher=password_hasher,
        cfg=AuthTokenConfig(),
    )


@pytest.fixture()
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()
