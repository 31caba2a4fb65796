"""Unit tests for idea HTTP routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from ideas.application.services import IdeaService
from ideas.domain.aggregates import Idea
from ideas.domain.value_objects import (
    Actor,
    Contributor,
    GroupRef,
    IdeaListCriteria,
    StageGate,
    Visibility,
)
from ideas.ports.exceptions import (
    AllowedGroupNotFoundError,
    CollaboratorNotFoundError,
    IdeaNotFoundError,
)

OWNER = Contributor(
    id="01HZXJ5V6Q3J2J8Y6S9Y9M4K7A", email="ada@example.com", username="ada"
)


@pytest.fixture
def actor() -> Actor:
    return Actor(user_id=OWNER.id, team_id="01HZXJ5V6Q3J2J8Y6S9Y9M4K7B")


@pytest.fixture
def idea(actor) -> Idea:
    return Idea.create(
        title="Solar roofs",
        description="Panels",
        owner=OWNER,
        team_id=actor.team_id,
        numbering_scope=actor.team_id,
        idea_number=3,
        global_counter=11,
        tags="energy,green",
        visibility=Visibility.GROUP,
        allowed_group=GroupRef(id="01HZXJ5V6Q3J2J8Y6S9Y9M4K7C", name="Platform"),
    )


@pytest.fixture
def mock_idea_service() -> AsyncMock:
    return AsyncMock(spec=IdeaService)


@pytest.fixture
def test_client(mock_idea_service, actor) -> TestClient:
    from ideas.dependencies.idea import get_current_actor, get_idea_service
    from ideas.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_idea_service] = lambda: mock_idea_service
    app.dependency_overrides[get_current_actor] = lambda: actor
    app.include_router(router)

    return TestClient(app)


class TestListIdeas:
    def test_filters_are_passed_as_criteria(
        self, test_client, mock_idea_service, actor, idea
    ):
        mock_idea_service.list_ideas.return_value = [idea]

        response = test_client.get(
            "/ideas",
            params={
                "stageGate": "LAUNCHED",
                "search": "solar",
                "includeSidelined": "true",
                "tag": "energy",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        mock_idea_service.list_ideas.assert_called_once_with(
            IdeaListCriteria(
                viewer_id=actor.user_id,
                stage_gate=StageGate.LAUNCHED,
                search="solar",
                tag="energy",
                include_sidelined=True,
            )
        )

    def test_response_is_camel_case(self, test_client, mock_idea_service, idea):
        mock_idea_service.list_ideas.return_value = [idea]

        (item,) = test_client.get("/ideas").json()

        assert item["ideaNumber"] == 3
        assert item["globalCounter"] == 11
        assert item["stageGate"] == "IDEA"
        assert item["isSidelined"] is False
        assert item["visibility"] == "GROUP"
        assert item["allowedGroup"] == {
            "id": "01HZXJ5V6Q3J2J8Y6S9Y9M4K7C",
            "name": "Platform",
        }
        assert item["owner"]["username"] == "ada"
        assert item["collaborators"] == []
        assert item["tags"] == "energy,green"

    def test_defaults(self, test_client, mock_idea_service, actor):
        mock_idea_service.list_ideas.return_value = []

        response = test_client.get("/ideas", params={"search": ""})

        assert response.status_code == status.HTTP_200_OK
        assert mock_idea_service.list_ideas.call_args.args[0] == IdeaListCriteria(
            viewer_id=actor.user_id
        )


class TestGetIdea:
    def test_invalid_id(self, test_client, mock_idea_service):
        response = test_client.get("/ideas/123")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid idea ID format"
        mock_idea_service.get_idea.assert_not_called()

    def test_not_found(self, test_client, mock_idea_service, idea):
        mock_idea_service.get_idea.side_effect = IdeaNotFoundError("x")

        response = test_client.get(f"/ideas/{idea.id.value}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Idea not found"


class TestCreateIdea:
    def test_created(self, test_client, mock_idea_service, actor, idea):
        mock_idea_service.create_idea.return_value = idea

        response = test_client.post(
            "/ideas",
            json={
                "title": "Solar roofs",
                "description": "Panels",
                "visibility": "GROUP",
                "allowedGroupId": "01HZXJ5V6Q3J2J8Y6S9Y9M4K7C",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        kwargs = mock_idea_service.create_idea.call_args.kwargs
        assert kwargs["visibility"] == Visibility.GROUP
        assert kwargs["allowed_group_id"] == "01HZXJ5V6Q3J2J8Y6S9Y9M4K7C"
        assert mock_idea_service.create_idea.call_args.args == (actor,)

    def test_group_without_group_id(self, test_client, mock_idea_service):
        mock_idea_service.create_idea.side_effect = ValueError(
            "allowedGroupId is required for GROUP visibility"
        )

        response = test_client.post(
            "/ideas",
            json={"title": "Solar", "description": "Panels", "visibility": "GROUP"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "allowedGroupId is required for GROUP visibility"

    def test_unknown_group(self, test_client, mock_idea_service):
        mock_idea_service.create_idea.side_effect = AllowedGroupNotFoundError("x")

        response = test_client.post(
            "/ideas",
            json={
                "title": "Solar",
                "description": "Panels",
                "visibility": "GROUP",
                "allowedGroupId": "missing",
            },
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Group not found"

    def test_unexpected_error(self, test_client, mock_idea_service):
        mock_idea_service.create_idea.side_effect = RuntimeError("db down")

        response = test_client.post(
            "/ideas", json={"title": "Solar", "description": "Panels"}
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Failed to create idea"


class TestMutations:
    def test_update_forbidden(self, test_client, mock_idea_service, idea):
        mock_idea_service.update_idea.side_effect = PermissionError(
            "Not authorized to edit this idea"
        )

        response = test_client.put(
            f"/ideas/{idea.id.value}", json={"stageGate": "IN_DEVELOPMENT"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Not authorized to edit this idea"
        assert (
            mock_idea_service.update_idea.call_args.kwargs["stage_gate"]
            == StageGate.IN_DEVELOPMENT
        )

    def test_sideline(self, test_client, mock_idea_service, idea):
        idea.toggle_sideline()
        mock_idea_service.toggle_sideline.return_value = idea

        response = test_client.patch(f"/ideas/{idea.id.value}/sideline")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["isSidelined"] is True
        assert response.json()["stageGate"] == "SIDELINED"

    def test_delete(self, test_client, mock_idea_service, idea):
        response = test_client.delete(f"/ideas/{idea.id.value}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Idea deleted successfully"}

    def test_delete_out_of_scope(self, test_client, mock_idea_service, idea):
        mock_idea_service.delete_idea.side_effect = IdeaNotFoundError("x")

        response = test_client.delete(f"/ideas/{idea.id.value}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_add_collaborator_outside_team(self, test_client, mock_idea_service, idea):
        mock_idea_service.add_collaborator.side_effect = CollaboratorNotFoundError(
            "User not found in team"
        )

        response = test_client.post(
            f"/ideas/{idea.id.value}/collaborators", json={"userId": "01STRANGER"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "User not found in team"

    def test_remove_collaborator(self, test_client, mock_idea_service, idea):
        mock_idea_service.remove_collaborator.return_value = idea

        response = test_client.delete(
            f"/ideas/{idea.id.value}/collaborators/01HZXJ5V6Q3J2J8Y6S9Y9M4K7D"
        )

        assert response.status_code == status.HTTP_200_OK
        assert (
            mock_idea_service.remove_collaborator.call_args.kwargs["user_id"]
            == "01HZXJ5V6Q3J2J8Y6S9Y9M4K7D"
        )
