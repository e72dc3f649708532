"""Factory Boy definition for :class:`authsvc.models.user.User`."""

from __future__ import annotations

import factory
from authsvc.infra.security import WerkzeugPasswordHasher
from authsvc.models.user import User

from tests.factories import BaseFactory, SQLAlchemySession

_hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")


class UserFactory(BaseFactory):
    """
    Build persisted :class:`authsvc.models.user.User` instances.

    Notes
    -----
    - ``password`` is hashed through the password hasher port; pass
      ``password="..."`` to pick the plaintext.
    - ``roles`` accepts an iterable of :class:`Role` rows.
    """

    class Meta:
        model = User
        exclude = ("password",)

    id = None  # let autoincrement handle it
    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.LazyAttribute(lambda o: f"{o.username.capitalize()} Tester")
    password = "Passw0rd!"
    password_hash = factory.LazyAttribute(lambda o: _hasher.hash(o.password))

    @factory.post_generation
    def roles(obj, create, extracted, **kwargs):
        """Attach roles passed as ``roles=[...]``."""
        if extracted:
            obj.roles = set(extracted)
            if create:
                SQLAlchemySession.get().flush()
