"""Dependencies for group and invitation services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.notifier import IamNotifier
from iam.application.observability import DefaultGroupServiceProbe, GroupServiceProbe
from iam.application.services import GroupService
from iam.dependencies.authentication import get_observation_context
from iam.dependencies.notifications import get_iam_notifier
from iam.dependencies.user import get_user_repository
from iam.infrastructure.group_repository import GroupRepository
from iam.infrastructure.invitation_repository import InvitationRepository
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_write_session
from shared_kernel.observability_context import ObservationContext


def get_group_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> GroupServiceProbe:
    """Group service probe bound to the caller's identity."""
    return DefaultGroupServiceProbe().with_context(context)


def get_group_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> GroupRepository:
    return GroupRepository(session=session)


def get_invitation_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> InvitationRepository:
    return InvitationRepository(session=session)


def get_group_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    group_repo: Annotated[GroupRepository, Depends(get_group_repository)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    invitation_repo: Annotated[
        InvitationRepository, Depends(get_invitation_repository)
    ],
    notifier: Annotated[IamNotifier, Depends(get_iam_notifier)],
    probe: Annotated[GroupServiceProbe, Depends(get_group_service_probe)],
) -> GroupService:
    """Get GroupService instance.

    Args:
        session: Database session for transaction management
        group_repo: Group repository (shares session via FastAPI dependency caching)
        user_repo: User repository for owner, member and invitee lookups
        invitation_repo: Invitation repository
        notifier: Sends invitation emails
        probe: Group service probe bound to the caller

    Returns:
        GroupService instance
    """
    return GroupService(
        session=session,
        group_repository=group_repo,
        user_repository=user_repo,
        invitation_repository=invitation_repo,
        notifier=notifier,
        probe=probe,
    )
