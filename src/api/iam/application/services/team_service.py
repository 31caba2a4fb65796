"""Team application service for IAM bounded context."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultTeamServiceProbe, TeamServiceProbe
from iam.application.value_objects import CurrentUser
from iam.domain.aggregates import Team, User
from iam.domain.value_objects import TeamId
from iam.ports.exceptions import TeamNotFoundError
from iam.ports.repositories import ITeamRepository, IUserRepository


class TeamService:
    """Read access to the caller's own team and its members."""

    def __init__(
        self,
        session: AsyncSession,
        team_repository: ITeamRepository,
        user_repository: IUserRepository,
        probe: TeamServiceProbe | None = None,
    ):
        self._session = session
        self._team_repository = team_repository
        self._user_repository = user_repository
        self._probe = probe or DefaultTeamServiceProbe()

    async def get_team(self, team_id: TeamId, actor: CurrentUser) -> tuple[Team, list[User]]:
        """Return the team and its members.

        Raises:
            PermissionError: If team_id is not the caller's team
            TeamNotFoundError: If the team does not exist
        """
        self._ensure_own_team(team_id, actor)
        async with self._session.begin():
            team = await self._team_repository.get_by_id(team_id)
            if team is None:
                raise TeamNotFoundError(f"Team {team_id} not found")
            members = await self._user_repository.list_by_team(team_id)
        return team, members

    async def list_members(self, team_id: TeamId, actor: CurrentUser) -> list[User]:
        """Return the members of the caller's team, ordered by username."""
        _, members = await self.get_team(team_id, actor)
        return members

    def _ensure_own_team(self, team_id: TeamId, actor: CurrentUser) -> None:
        if actor.team_id != team_id:
            self._probe.foreign_team_access_denied(team_id.value, actor.user_id.value)
            raise PermissionError("Access denied to this team")
