"""Idempotent seed helpers for the finite role set."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from authsvc.models.role import Role, RoleName

LOGGER = logging.getLogger(__name__)


def seed_roles(session: Session, names: Iterable[RoleName] = tuple(RoleName)) -> dict[str, int]:
    """Insert missing roles and report counters.

    :param session: Session used for lookups and inserts (not committed here).
    :param names: Roles to ensure; defaults to every :class:`RoleName`.
    :returns: ``{"created": n, "existing": m}``.
    """
    counters = {"created": 0, "existing": 0}
    existing = set(session.execute(select(Role.name)).scalars())
    for name in names:
        if name in existing:
            counters["existing"] += 1
            LOGGER.debug("Role %s already present", name.value)
            continue
        session.add(Role(name=name))
        counters["created"] += 1
        LOGGER.info("Created role %s", name.value)
    session.flush()
    return counters


def run_all(db: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Seed every reference table and commit once.

    :returns: Per-table counters keyed by table name.
    """
    if verbose:
        LOGGER.setLevel(logging.DEBUG)
    summary = {"roles": seed_roles(db.session)}
    db.session.commit()
    return summary
