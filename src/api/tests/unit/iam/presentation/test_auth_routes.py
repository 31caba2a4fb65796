"""Unit tests for account HTTP routes."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.application.services import AuthService, GroupService
from iam.application.value_objects import Account, AuthSession, CurrentUser
from iam.domain.aggregates import Team, User
from iam.domain.value_objects import (
    GroupId,
    InvitationId,
    PendingInvitation,
    Role,
)
from iam.ports.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    TeamNotFoundError,
)


@pytest.fixture
def team() -> Team:
    return Team.create("Research")


@pytest.fixture
def user(team) -> User:
    return User.register(
        email="ada@example.com", password_hash="x", team_id=team.id, role=Role.ADMIN
    )


@pytest.fixture
def mock_auth_service() -> AsyncMock:
    return AsyncMock(spec=AuthService)


@pytest.fixture
def mock_group_service() -> AsyncMock:
    return AsyncMock(spec=GroupService)


@pytest.fixture
def mock_current_user(user) -> CurrentUser:
    return CurrentUser(user_id=user.id, team_id=user.team_id, role=user.role)


@pytest.fixture
def test_client(mock_auth_service, mock_group_service, mock_current_user) -> TestClient:
    from iam.dependencies.authentication import get_current_user
    from iam.dependencies.group import get_group_service
    from iam.dependencies.user import get_auth_service
    from iam.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_auth_service] = lambda: mock_auth_service
    app.dependency_overrides[get_group_service] = lambda: mock_group_service
    app.dependency_overrides[get_current_user] = lambda: mock_current_user
    app.include_router(router)

    return TestClient(app)


class TestSignup:
    def test_returns_token_and_camel_case_user(
        self, test_client, mock_auth_service, user, team
    ):
        mock_auth_service.signup.return_value = AuthSession(
            token="signed", account=Account(user, team)
        )

        response = test_client.post(
            "/auth/signup",
            json={
                "email": "ada@example.com",
                "password": "secret123",
                "teamName": "Research",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["token"] == "signed"
        assert body["user"] == {
            "id": user.id.value,
            "email": "ada@example.com",
            "username": "ada",
            "role": "ADMIN",
            "team": {"id": team.id.value, "name": "Research"},
        }
        kwargs = mock_auth_service.signup.call_args.kwargs
        assert kwargs["team_name"] == "Research"
        assert kwargs["team_id"] is None

    def test_invalid_team_id_format(self, test_client, mock_auth_service):
        response = test_client.post(
            "/auth/signup",
            json={"email": "ada@example.com", "password": "secret123", "teamId": "x"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid team ID format"
        mock_auth_service.signup.assert_not_called()

    @pytest.mark.parametrize(
        ("error", "expected_status", "detail"),
        [
            (DuplicateEmailError("x"), 409, "Email already registered"),
            (DuplicateUsernameError("x"), 409, "Username already taken"),
            (TeamNotFoundError("x"), 404, "Team not found"),
            (ValueError("Team name must be between 1 and 255 characters"), 400, None),
            (RuntimeError("boom"), 500, "Signup failed"),
        ],
    )
    def test_error_mapping(
        self, test_client, mock_auth_service, error, expected_status, detail
    ):
        mock_auth_service.signup.side_effect = error

        response = test_client.post(
            "/auth/signup", json={"email": "ada@example.com", "password": "secret123"}
        )

        assert response.status_code == expected_status
        if detail:
            assert response.json()["detail"] == detail


class TestLogin:
    def test_success(self, test_client, mock_auth_service, user):
        mock_auth_service.login.return_value = AuthSession(
            token="signed", account=Account(user, None)
        )

        response = test_client.post(
            "/auth/login", json={"email": "ada@example.com", "password": "secret123"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["team"] is None

    def test_invalid_credentials(self, test_client, mock_auth_service):
        mock_auth_service.login.side_effect = InvalidCredentialsError("Invalid credentials")

        response = test_client.post(
            "/auth/login", json={"email": "ada@example.com", "password": "wrong"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid credentials"


class TestAccount:
    def test_me(self, test_client, mock_auth_service, mock_current_user, user, team):
        mock_auth_service.get_account.return_value = Account(user, team)

        response = test_client.get("/auth/me")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["team"]["name"] == "Research"
        mock_auth_service.get_account.assert_called_once_with(mock_current_user.user_id)

    def test_profile_conflict(self, test_client, mock_auth_service):
        mock_auth_service.update_profile.side_effect = DuplicateUsernameError("x")

        response = test_client.put("/auth/profile", json={"username": "grace"})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_change_password(self, test_client, mock_auth_service):
        response = test_client.put(
            "/auth/change-password",
            json={"currentPassword": "secret123", "newPassword": "newsecret"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Password changed successfully"}

    def test_change_password_wrong_current(self, test_client, mock_auth_service):
        mock_auth_service.change_password.side_effect = IncorrectPasswordError("x")

        response = test_client.put(
            "/auth/change-password",
            json={"currentPassword": "wrong", "newPassword": "newsecret"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Current password is incorrect"


class TestPasswordReset:
    def test_request_does_not_reveal_account(self, test_client, mock_auth_service):
        from iam.presentation.auth.routes import RESET_REQUESTED_MESSAGE

        response = test_client.post(
            "/auth/request-password-reset", json={"email": "nobody@example.com"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": RESET_REQUESTED_MESSAGE}

    def test_reset_with_bad_token(self, test_client, mock_auth_service):
        mock_auth_service.reset_password.side_effect = InvalidResetTokenError("x")

        response = test_client.post(
            "/auth/reset-password", json={"token": "abc", "newPassword": "newsecret"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid or expired reset token"


def test_notifications(test_client, mock_group_service):
    created = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
    invitation = PendingInvitation(
        invitation_id=InvitationId.generate(),
        group_id=GroupId.generate(),
        group_name="Platform",
        sender_username="owner",
        created_at=created,
    )
    mock_group_service.list_notifications.return_value = [invitation]

    response = test_client.get("/auth/notifications")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [
        {
            "id": invitation.invitation_id.value,
            "type": "GROUP_INVITATION",
            "group": {"id": invitation.group_id.value, "name": "Platform"},
            "sender": {"username": "owner"},
            "createdAt": created.isoformat(),
        }
    ]
