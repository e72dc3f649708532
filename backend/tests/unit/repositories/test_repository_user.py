"""Unit tests for UserRepository and RoleRepository."""

import pytest
from authsvc.models.role import RoleName
from authsvc.repositories.role import RoleRepository
from authsvc.repositories.user import UserRepository

from tests.factories.role import RoleFactory
from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs lookups and uniqueness probes."""

    @pytest.fixture()
    def repo(self):
        return UserRepository()

    def test_create_and_get_user(self, repo, session):
        """Create a user and fetch it by email to verify retrieval."""
        u = UserFactory(email="alice@example.com", username="alice")

        fetched = repo.get_by_email("alice@example.com")
        assert fetched is not None
        assert fetched.id == u.id
        assert fetched.username == "alice"

    def test_email_is_stored_and_matched_normalized(self, repo, session):
        UserFactory(email="  Mixed.Case@Example.COM ")

        assert repo.get_by_email("mixed.case@example.com") is not None
        assert repo.get_by_email("MIXED.CASE@EXAMPLE.COM") is not None

    def test_get_by_username_or_email(self, repo, session):
        u = UserFactory(username="bob", email="bob@example.com")

        assert repo.get_by_username_or_email("bob").id == u.id
        assert repo.get_by_username_or_email("Bob@Example.com").id == u.id
        assert repo.get_by_username_or_email("  bob  ").id == u.id
        assert repo.get_by_username_or_email("robert") is None

    def test_exists_probes(self, repo, session):
        """Return existence flags for known and unknown keys."""
        UserFactory(username="carol", email="carol@example.com")

        assert repo.exists_by_username("carol")
        assert not repo.exists_by_username("caroline")
        assert repo.exists_by_email("CAROL@example.com")
        assert not repo.exists_by_email("nonexistent@example.com")

    def test_get_by_username_is_exact(self, repo, session):
        UserFactory(username="dave")

        assert repo.get_by_username("dave") is not None
        assert repo.get_by_username("dav") is None

    def test_roles_are_loaded_with_the_user(self, repo, session):
        role = RoleFactory()
        u = UserFactory(roles=[role])
        session.expunge_all()

        fetched = repo.get(u.id)
        assert fetched.role_names == ["ROLE_USER"]

    def test_model_rejects_malformed_email(self):
        with pytest.raises(ValueError):
            UserFactory.build(email="no-at-sign")


class TestRoleRepository:
    @pytest.fixture()
    def repo(self):
        return RoleRepository()

    def test_find_by_name(self, repo, session):
        role = RoleFactory(name=RoleName.ROLE_ADMIN)

        assert repo.find_by_name("ROLE_ADMIN").id == role.id
        assert repo.find_by_name(RoleName.ROLE_ADMIN).id == role.id

    def test_missing_role_is_none(self, repo, session):
        assert repo.find_by_name(RoleName.ROLE_USER) is None

    def test_unknown_role_name_raises(self, repo, session):
        with pytest.raises(ValueError):
            repo.find_by_name("ROLE_GHOST")
