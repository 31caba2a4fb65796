"""Unit tests for the User aggregate."""

import pytest

from iam.domain.aggregates import User, username_from_email
from iam.domain.value_objects import Role, TeamId


class TestUserRegistration:
    """Tests for User.register()."""

    def test_username_defaults_to_email_local_part(self):
        user = User.register(email="ada@example.com", password_hash="hash")

        assert user.username == "ada"
        assert user.role == Role.MEMBER
        assert user.team_id is None

    def test_email_is_normalized(self):
        user = User.register(email="  Ada@Example.COM ", password_hash="hash")

        assert user.email == "ada@example.com"

    def test_explicit_username_wins(self):
        user = User.register(
            email="ada@example.com", password_hash="hash", username=" lovelace "
        )

        assert user.username == "lovelace"

    def test_blank_username_falls_back_to_email(self):
        user = User.register(email="ada@example.com", password_hash="hash", username="  ")

        assert user.username == "ada"

    def test_admin_with_team(self):
        team_id = TeamId.generate()

        user = User.register(
            email="ada@example.com",
            password_hash="hash",
            team_id=team_id,
            role=Role.ADMIN,
        )

        assert user.is_admin
        assert user.team_id == team_id

    def test_rejects_email_without_at_sign(self):
        with pytest.raises(ValueError, match="valid email"):
            User.register(email="not-an-email", password_hash="hash")

    def test_rejects_username_over_fifty_characters(self):
        with pytest.raises(ValueError, match="50"):
            User.register(email="ada@example.com", password_hash="hash", username="x" * 51)


class TestUserBehavior:
    def test_rename(self):
        user = User.register(email="ada@example.com", password_hash="hash")

        user.rename("countess")

        assert user.username == "countess"

    def test_rename_rejects_empty(self):
        user = User.register(email="ada@example.com", password_hash="hash")

        with pytest.raises(ValueError, match="empty"):
            user.rename("   ")

        assert user.username == "ada"

    def test_change_password_hash(self):
        user = User.register(email="ada@example.com", password_hash="old")

        user.change_password_hash("new")

        assert user.password_hash == "new"

    def test_summary_projection(self):
        user = User.register(email="ada@example.com", password_hash="hash")

        summary = user.summary()

        assert summary.id == user.id
        assert summary.email == "ada@example.com"
        assert summary.username == "ada"

    def test_identity_equality(self):
        user = User.register(email="ada@example.com", password_hash="hash")
        renamed = User(
            id=user.id, email=user.email, username="other", password_hash="x"
        )

        assert user == renamed
        assert hash(user) == hash(renamed)
        assert user != User.register(email="ada@example.com", password_hash="hash")


def test_username_from_email():
    assert username_from_email("grace.hopper@navy.mil") == "grace.hopper"
