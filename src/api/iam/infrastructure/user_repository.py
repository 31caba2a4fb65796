"""PostgreSQL implementation of IUserRepository and ITeamRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Team, User
from iam.domain.value_objects import Role, TeamId, UserId
from iam.infrastructure.models import TeamModel, UserModel
from iam.infrastructure.observability import (
    DefaultTeamRepositoryProbe,
    DefaultUserRepositoryProbe,
    TeamRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import DuplicateEmailError, DuplicateUsernameError
from iam.ports.repositories import ITeamRepository, IUserRepository


def user_to_domain(model: UserModel) -> User:
    """Convert a users row into the User aggregate."""
    return User(
        id=UserId(value=model.id),
        email=model.email,
        username=model.username,
        password_hash=model.password_hash,
        role=Role(model.role),
        team_id=TeamId(value=model.team_id) if model.team_id else None,
        created_at=model.created_at,
    )


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates.

    Unique constraints on email and username are the final word on
    uniqueness; violations surface as DuplicateEmailError or
    DuplicateUsernameError even when a concurrent signup slipped past the
    service's pre-insert check.
    """

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def save(self, user: User) -> None:
        """Insert or update a user, flushing so constraint violations surface here."""
        stmt = select(UserModel).where(UserModel.id == user.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.username = user.username
            model.password_hash = user.password_hash
            model.role = user.role.value
            model.team_id = user.team_id.value if user.team_id else None
        else:
            model = UserModel(
                id=user.id.value,
                email=user.email,
                username=user.username,
                password_hash=user.password_hash,
                role=user.role.value,
                team_id=user.team_id.value if user.team_id else None,
                created_at=user.created_at,
            )
            self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            message = str(e.orig)
            if "email" in message:
                self._probe.duplicate_user("email", user.email)
                raise DuplicateEmailError(
                    f"Email {user.email} is already registered"
                ) from e
            if "username" in message:
                self._probe.duplicate_user("username", user.username)
                raise DuplicateUsernameError(
                    f"Username {user.username} is already taken"
                ) from e
            raise

        self._probe.user_saved(user.id.value, user.username)

    async def get_by_id(self, user_id: UserId) -> User | None:
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        return await self._fetch_one(stmt, "id", user_id.value)

    async def get_by_email(self, email: str) -> User | None:
        normalized = email.strip().lower()
        stmt = select(UserModel).where(func.lower(UserModel.email) == normalized)
        return await self._fetch_one(stmt, "email", normalized)

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(UserModel).where(UserModel.username == username)
        return await self._fetch_one(stmt, "username", username)

    async def list_by_team(self, team_id: TeamId) -> list[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.team_id == team_id.value)
            .order_by(UserModel.username)
        )
        result = await self._session.execute(stmt)
        return [user_to_domain(model) for model in result.scalars().all()]

    async def _fetch_one(self, stmt, lookup: str, value: str) -> User | None:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(lookup, value)
            return None

        return user_to_domain(model)


class TeamRepository(ITeamRepository):
    """PostgreSQL-backed repository for Team aggregates."""

    def __init__(
        self, session: AsyncSession, probe: TeamRepositoryProbe | None = None
    ) -> None:
        self._session = session
        self._probe = probe or DefaultTeamRepositoryProbe()

    async def save(self, team: Team) -> None:
        stmt = select(TeamModel).where(TeamModel.id == team.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.name = team.name
        else:
            self._session.add(TeamModel(id=team.id.value, name=team.name))

        await self._session.flush()
        self._probe.team_saved(team.id.value, team.name)

    async def get_by_id(self, team_id: TeamId) -> Team | None:
        stmt = select(TeamModel).where(TeamModel.id == team_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.team_not_found(team_id.value)
            return None

        return Team(id=TeamId(value=model.id), name=model.name)
