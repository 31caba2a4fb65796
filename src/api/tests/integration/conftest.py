"""Integration test fixtures shared by all bounded contexts.

These fixtures require a running PostgreSQL instance, configured through
the usual INNOFOLIO_DB_* environment variables. Tests are skipped when the
database cannot be reached.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import iam.infrastructure.models  # noqa: F401
import ideas.infrastructure.models  # noqa: F401
from iam.domain.aggregates import Team, User
from iam.infrastructure.user_repository import TeamRepository, UserRepository
from infrastructure.database.engines import create_write_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings read from the environment."""
    return DatabaseSettings()


@pytest_asyncio.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Engine bound to a database whose schema matches the ORM models."""
    engine = create_write_engine(integration_db_settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, SQLAlchemyError) as e:
        await engine.dispose()
        pytest.skip(f"PostgreSQL is not available: {e}")

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def async_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session for integration tests."""
    async with session_factory() as session:
        yield session


async def _delete_all_rows(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())


@pytest_asyncio.fixture
async def clean_tables(engine: AsyncEngine) -> AsyncGenerator[None, None]:
    """Empty every table before and after the test."""
    await _delete_all_rows(engine)
    yield
    await _delete_all_rows(engine)


@pytest.fixture
def create_team(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[str], Awaitable[Team]]:
    """Factory persisting a team in its own transaction."""

    async def _create(name: str) -> Team:
        team = Team.create(name)
        async with session_factory() as session, session.begin():
            await TeamRepository(session).save(team)
        return team

    return _create


@pytest.fixture
def register_user(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[User]]:
    """Factory persisting a user, optionally on a team, in its own transaction."""

    async def _register(email: str, team: Team | None = None) -> User:
        user = User.register(
            email=email,
            password_hash="$2b$12$integration.tests.do.not.log.in",
            team_id=team.id if team else None,
        )
        async with session_factory() as session, session.begin():
            await UserRepository(session).save(user)
        return user

    return _register
