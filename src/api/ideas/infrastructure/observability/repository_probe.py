"""Domain probes for idea persistence."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IdeaRepositoryProbe(Protocol):
    """Domain probe for idea repository operations."""

    def idea_saved(self, idea_id: str, collaborator_count: int) -> None:
        ...

    def idea_not_found(self, idea_id: str) -> None:
        ...

    def ideas_listed(self, viewer_id: str, count: int) -> None:
        ...

    def idea_deleted(self, idea_id: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> IdeaRepositoryProbe:
        ...


class CounterRepositoryProbe(Protocol):
    """Domain probe for idea number allocation."""

    def counter_incremented(self, scope: str, value: int) -> None:
        ...

    def with_context(self, context: ObservationContext) -> CounterRepositoryProbe:
        ...


class DefaultIdeaRepositoryProbe(StructlogProbe):
    """Default implementation of IdeaRepositoryProbe using structlog."""

    def idea_saved(self, idea_id: str, collaborator_count: int) -> None:
        self._logger.info(
            "idea_saved",
            idea_id=idea_id,
            collaborator_count=collaborator_count,
            **self._get_context_kwargs(),
        )

    def idea_not_found(self, idea_id: str) -> None:
        self._logger.debug(
            "idea_not_found",
            idea_id=idea_id,
            **self._get_context_kwargs(),
        )

    def ideas_listed(self, viewer_id: str, count: int) -> None:
        self._logger.debug(
            "ideas_listed",
            viewer_id=viewer_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def idea_deleted(self, idea_id: str) -> None:
        self._logger.info(
            "idea_deleted",
            idea_id=idea_id,
            **self._get_context_kwargs(),
        )


class DefaultCounterRepositoryProbe(StructlogProbe):
    """Default implementation of CounterRepositoryProbe using structlog."""

    def counter_incremented(self, scope: str, value: int) -> None:
        self._logger.debug(
            "counter_incremented",
            scope=scope,
            value=value,
            **self._get_context_kwargs(),
        )
