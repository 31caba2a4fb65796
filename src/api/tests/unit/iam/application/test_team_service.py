"""Unit tests for TeamService."""

from unittest.mock import create_autospec

import pytest

from iam.application.observability import TeamServiceProbe
from iam.application.services import TeamService
from iam.application.value_objects import CurrentUser
from iam.domain.aggregates import Team, User
from iam.domain.value_objects import Role, TeamId
from iam.ports.exceptions import TeamNotFoundError
from iam.ports.repositories import ITeamRepository, IUserRepository


@pytest.fixture
def team() -> Team:
    return Team.create("Research")


@pytest.fixture
def members(team) -> list[User]:
    return [
        User.register(email=f"{name}@example.com", password_hash="x", team_id=team.id)
        for name in ("ada", "grace")
    ]


@pytest.fixture
def team_repository(team):
    repo = create_autospec(ITeamRepository, instance=True)
    repo.get_by_id.return_value = team
    return repo


@pytest.fixture
def user_repository(members):
    repo = create_autospec(IUserRepository, instance=True)
    repo.list_by_team.return_value = members
    return repo


@pytest.fixture
def probe():
    return create_autospec(TeamServiceProbe, instance=True)


@pytest.fixture
def team_service(mock_session, team_repository, user_repository, probe):
    return TeamService(
        session=mock_session,
        team_repository=team_repository,
        user_repository=user_repository,
        probe=probe,
    )


def _actor(team_id: TeamId | None) -> CurrentUser:
    from iam.domain.value_objects import UserId

    return CurrentUser(user_id=UserId.generate(), team_id=team_id, role=Role.MEMBER)


class TestGetTeam:
    @pytest.mark.asyncio
    async def test_own_team(self, team_service, team, members):
        found, found_members = await team_service.get_team(team.id, _actor(team.id))

        assert found == team
        assert found_members == members

    @pytest.mark.asyncio
    async def test_foreign_team_is_forbidden(
        self, team_service, team, team_repository, probe
    ):
        actor = _actor(TeamId.generate())

        with pytest.raises(PermissionError, match="Access denied"):
            await team_service.get_team(team.id, actor)

        team_repository.get_by_id.assert_not_awaited()
        probe.foreign_team_access_denied.assert_called_once_with(
            team.id.value, actor.user_id.value
        )

    @pytest.mark.asyncio
    async def test_teamless_actor_is_forbidden(self, team_service, team):
        with pytest.raises(PermissionError):
            await team_service.get_team(team.id, _actor(None))

    @pytest.mark.asyncio
    async def test_missing_team(self, team_service, team, team_repository):
        team_repository.get_by_id.return_value = None

        with pytest.raises(TeamNotFoundError):
            await team_service.get_team(team.id, _actor(team.id))


@pytest.mark.asyncio
async def test_list_members(team_service, team, members):
    assert await team_service.list_members(team.id, _actor(team.id)) == members
