"""Unit tests for team HTTP routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.application.services import TeamService
from iam.application.value_objects import CurrentUser
from iam.domain.aggregates import Team, User
from iam.domain.value_objects import Role
from iam.ports.exceptions import TeamNotFoundError


@pytest.fixture
def team() -> Team:
    return Team.create("Research")


@pytest.fixture
def members(team) -> list[User]:
    return [
        User.register(
            email="ada@example.com", password_hash="x", team_id=team.id, role=Role.ADMIN
        ),
        User.register(email="grace@example.com", password_hash="x", team_id=team.id),
    ]


@pytest.fixture
def mock_team_service() -> AsyncMock:
    return AsyncMock(spec=TeamService)


@pytest.fixture
def test_client(mock_team_service, members) -> TestClient:
    from iam.dependencies.authentication import get_current_user
    from iam.dependencies.team import get_team_service
    from iam.presentation import router

    admin = members[0]
    app = FastAPI()
    app.dependency_overrides[get_team_service] = lambda: mock_team_service
    app.dependency_overrides[get_current_user] = lambda: CurrentUser(
        user_id=admin.id, team_id=admin.team_id, role=admin.role
    )
    app.include_router(router)

    return TestClient(app)


def test_get_team(test_client, mock_team_service, team, members):
    mock_team_service.get_team.return_value = (team, members)

    response = test_client.get(f"/teams/{team.id.value}")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["name"] == "Research"
    assert [m["username"] for m in body["members"]] == ["ada", "grace"]
    assert body["members"][0]["role"] == "ADMIN"


def test_list_members(test_client, mock_team_service, team, members):
    mock_team_service.list_members.return_value = members

    response = test_client.get(f"/teams/{team.id.value}/members")

    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()) == 2


def test_foreign_team(test_client, mock_team_service, team):
    mock_team_service.get_team.side_effect = PermissionError("Access denied to this team")

    response = test_client.get(f"/teams/{team.id.value}")

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Access denied to this team"


def test_missing_team(test_client, mock_team_service, team):
    mock_team_service.list_members.side_effect = TeamNotFoundError("x")

    response = test_client.get(f"/teams/{team.id.value}/members")

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_invalid_team_id(test_client):
    response = test_client.get("/teams/abc")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
