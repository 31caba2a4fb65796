"""Integration tests for idea numbering against PostgreSQL.

Numbers come from the idea_counters upsert, so these tests exercise the
real INSERT ... ON CONFLICT path rather than a mocked counter.
"""

import pytest

from ideas.domain.value_objects import GLOBAL_SCOPE, Actor
from ideas.infrastructure.counter_repository import CounterRepository

pytestmark = pytest.mark.integration


class TestCounterUpsert:
    """Tests for CounterRepository.next_value."""

    @pytest.mark.asyncio
    async def test_first_value_is_one_then_increments(
        self, async_session, clean_tables
    ):
        """Should start a new scope at 1 and count up from there."""
        repository = CounterRepository(async_session)

        async with async_session.begin():
            first = await repository.next_value("scope-a")
            second = await repository.next_value("scope-a")
            other = await repository.next_value("scope-b")

        assert (first, second, other) == (1, 2, 1)

    @pytest.mark.asyncio
    async def test_values_survive_across_transactions(
        self, async_session, clean_tables
    ):
        """Should continue from the committed value in a later transaction."""
        repository = CounterRepository(async_session)

        async with async_session.begin():
            await repository.next_value("scope-a")
        async with async_session.begin():
            value = await repository.next_value("scope-a")

        assert value == 2


class TestIdeaNumbering:
    """Tests for numbers assigned by IdeaService.create_idea."""

    @pytest.mark.asyncio
    async def test_team_ideas_are_numbered_in_sequence(
        self, idea_service, create_team, register_user, clean_tables
    ):
        """Should number ideas 1, 2, 3 across all members of a team."""
        team = await create_team("Platform")
        alice = await register_user("alice@example.com", team=team)
        bob = await register_user("bob@example.com", team=team)
        actors = [
            Actor(user_id=alice.id.value, team_id=team.id.value),
            Actor(user_id=bob.id.value, team_id=team.id.value),
            Actor(user_id=alice.id.value, team_id=team.id.value),
        ]

        ideas = [
            await idea_service.create_idea(
                actor=actor, title=f"Idea {i}", description="Details"
            )
            for i, actor in enumerate(actors)
        ]

        assert [idea.idea_number for idea in ideas] == [1, 2, 3]
        assert {idea.numbering_scope for idea in ideas} == {team.id.value}

    @pytest.mark.asyncio
    async def test_personal_scopes_number_independently(
        self, idea_service, register_user, clean_tables
    ):
        """Should give each teamless user their own sequence starting at 1."""
        carol = await register_user("carol@example.com")
        dave = await register_user("dave@example.com")
        carol_actor = Actor(user_id=carol.id.value)
        dave_actor = Actor(user_id=dave.id.value)

        c1 = await idea_service.create_idea(carol_actor, "C1", "Details")
        d1 = await idea_service.create_idea(dave_actor, "D1", "Details")
        c2 = await idea_service.create_idea(carol_actor, "C2", "Details")
        d2 = await idea_service.create_idea(dave_actor, "D2", "Details")

        assert (c1.idea_number, c2.idea_number) == (1, 2)
        assert (d1.idea_number, d2.idea_number) == (1, 2)
        assert c1.numbering_scope == f"personal-{carol.id.value}"
        assert d1.numbering_scope == f"personal-{dave.id.value}"

    @pytest.mark.asyncio
    async def test_global_counter_increases_across_scopes(
        self, idea_service, create_team, register_user, async_session, clean_tables
    ):
        """Should draw global counters from one shared sequence."""
        team = await create_team("Platform")
        alice = await register_user("alice@example.com", team=team)
        carol = await register_user("carol@example.com")

        ideas = [
            await idea_service.create_idea(
                Actor(user_id=alice.id.value, team_id=team.id.value), "A", "Details"
            ),
            await idea_service.create_idea(
                Actor(user_id=carol.id.value), "C", "Details"
            ),
            await idea_service.create_idea(
                Actor(user_id=alice.id.value, team_id=team.id.value), "B", "Details"
            ),
        ]

        assert [idea.global_counter for idea in ideas] == [1, 2, 3]
        async with async_session.begin():
            next_global = await CounterRepository(async_session).next_value(
                GLOBAL_SCOPE
            )
        assert next_global == 4
