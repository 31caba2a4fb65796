"""Dependencies for account services and IAM repositories."""

from datetime import timedelta
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.notifier import IamNotifier
from iam.application.services import AuthService
from iam.dependencies.authentication import get_token_service
from iam.dependencies.notifications import get_iam_notifier
from iam.infrastructure.password_reset_repository import PasswordResetTokenRepository
from iam.infrastructure.user_repository import TeamRepository, UserRepository
from infrastructure.database.dependencies import get_write_session
from infrastructure.settings import get_auth_settings
from shared_kernel.auth import TokenService


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> UserRepository:
    return UserRepository(session=session)


def get_team_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> TeamRepository:
    return TeamRepository(session=session)


def get_password_reset_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> PasswordResetTokenRepository:
    return PasswordResetTokenRepository(session=session)


def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    team_repo: Annotated[TeamRepository, Depends(get_team_repository)],
    reset_repo: Annotated[
        PasswordResetTokenRepository, Depends(get_password_reset_repository)
    ],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    notifier: Annotated[IamNotifier, Depends(get_iam_notifier)],
) -> AuthService:
    """Get AuthService instance.

    Repositories share the request's session via FastAPI dependency caching,
    so everything the service does lands in one transaction.
    """
    settings = get_auth_settings()
    return AuthService(
        session=session,
        user_repository=user_repo,
        team_repository=team_repo,
        reset_token_repository=reset_repo,
        token_service=token_service,
        notifier=notifier,
        reset_token_ttl=timedelta(minutes=settings.password_reset_ttl_minutes),
    )
