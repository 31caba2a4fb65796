"""Repository protocols (ports) for the Ideas bounded context.

Implementations never commit; IdeaService owns the transaction.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ideas.domain.aggregates import Idea
from ideas.domain.value_objects import Contributor, GroupRef, IdeaId, IdeaListCriteria


@runtime_checkable
class IIdeaRepository(Protocol):
    """Repository for Idea aggregate persistence."""

    async def save(self, idea: Idea) -> None:
        """Persist an idea and reconcile its collaborator set."""
        ...

    async def get_by_id(self, idea_id: IdeaId) -> Idea | None:
        ...

    async def list_visible(self, criteria: IdeaListCriteria) -> list[Idea]:
        """Ideas visible to criteria.viewer_id matching all filters, newest first."""
        ...

    async def delete(self, idea: Idea) -> bool:
        ...


@runtime_checkable
class ICounterRepository(Protocol):
    """Monotonic counters used to number ideas."""

    async def next_value(self, scope: str) -> int:
        """Atomically increment the scope's counter and return the new value.

        The first call for a scope returns 1.
        """
        ...


@runtime_checkable
class IMemberDirectory(Protocol):
    """Read access to the users and groups owned by the IAM context."""

    async def get_contributor(self, user_id: str) -> Contributor | None:
        ...

    async def get_team_member(self, user_id: str, team_id: str) -> Contributor | None:
        """The user, if they belong to the given team."""
        ...

    async def get_group(self, group_id: str) -> GroupRef | None:
        ...

    async def group_ids_for(self, user_id: str) -> set[str]:
        """Ids of groups the user owns or is a member of."""
        ...
