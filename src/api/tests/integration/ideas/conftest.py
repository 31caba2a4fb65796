"""Integration fixtures for the Ideas bounded context."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ideas.application.services import IdeaService
from ideas.infrastructure.counter_repository import CounterRepository
from ideas.infrastructure.idea_repository import IdeaRepository
from ideas.infrastructure.member_directory import MemberDirectory


@pytest_asyncio.fixture
async def idea_service(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[IdeaService, None]:
    """IdeaService wired to real repositories on one session."""
    async with session_factory() as session:
        yield IdeaService(
            session=session,
            idea_repository=IdeaRepository(session),
            counter_repository=CounterRepository(session),
            directory=MemberDirectory(session),
        )
