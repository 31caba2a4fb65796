"""Dependencies for the team service."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultTeamServiceProbe
from iam.application.services import TeamService
from iam.dependencies.authentication import get_observation_context
from iam.dependencies.user import get_team_repository, get_user_repository
from iam.infrastructure.user_repository import TeamRepository, UserRepository
from infrastructure.database.dependencies import get_write_session
from shared_kernel.observability_context import ObservationContext


def get_team_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    team_repo: Annotated[TeamRepository, Depends(get_team_repository)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> TeamService:
    return TeamService(
        session=session,
        team_repository=team_repo,
        user_repository=user_repo,
        probe=DefaultTeamServiceProbe().with_context(context),
    )
