"""Dependencies for the idea service.

Authentication comes from the IAM context: the verified caller is turned
into an Actor, the Ideas context's view of a user.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.value_objects import CurrentUser
from iam.dependencies.authentication import get_current_user, get_observation_context
from ideas.application.observability import DefaultIdeaServiceProbe
from ideas.application.services import IdeaService
from ideas.domain.value_objects import Actor
from ideas.infrastructure.counter_repository import CounterRepository
from ideas.infrastructure.idea_repository import IdeaRepository
from ideas.infrastructure.member_directory import MemberDirectory
from infrastructure.database.dependencies import get_write_session
from shared_kernel.observability_context import ObservationContext


def get_current_actor(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Actor:
    return Actor(
        user_id=current_user.user_id.value,
        team_id=current_user.team_id.value if current_user.team_id else None,
        is_admin=current_user.is_admin,
    )


def get_idea_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> IdeaRepository:
    return IdeaRepository(session=session)


def get_counter_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> CounterRepository:
    return CounterRepository(session=session)


def get_member_directory(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> MemberDirectory:
    return MemberDirectory(session=session)


def get_idea_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    idea_repo: Annotated[IdeaRepository, Depends(get_idea_repository)],
    counter_repo: Annotated[CounterRepository, Depends(get_counter_repository)],
    directory: Annotated[MemberDirectory, Depends(get_member_directory)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> IdeaService:
    """Get IdeaService instance.

    Repositories share the request's session via FastAPI dependency
    caching, so counter allocation and the idea insert commit together.
    """
    return IdeaService(
        session=session,
        idea_repository=idea_repo,
        counter_repository=counter_repo,
        directory=directory,
        probe=DefaultIdeaServiceProbe().with_context(context),
    )
