"""PostgreSQL implementation of ICounterRepository."""

from __future__ import annotations

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from ideas.infrastructure.models import IdeaCounterModel
from ideas.infrastructure.observability import (
    CounterRepositoryProbe,
    DefaultCounterRepositoryProbe,
)
from ideas.ports.repositories import ICounterRepository


class CounterRepository(ICounterRepository):
    """Counters allocated with a single upsert-increment statement.

    ``INSERT ... ON CONFLICT DO UPDATE ... RETURNING`` takes a row lock on
    the scope's counter, so concurrent creates in one scope are serialized
    and never see the same value.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: CounterRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultCounterRepositoryProbe()

    async def next_value(self, scope: str) -> int:
        stmt = (
            insert(IdeaCounterModel)
            .values(scope=scope, value=1)
            .on_conflict_do_update(
                index_elements=[IdeaCounterModel.scope],
                set_={"value": IdeaCounterModel.value + 1},
            )
            .returning(IdeaCounterModel.value)
        )
        result = await self._session.execute(stmt)
        value = result.scalar_one()
        self._probe.counter_incremented(scope, value)
        return value
