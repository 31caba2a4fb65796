"""Protocol for team service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TeamServiceProbe(Protocol):
    """Domain probe for team read operations."""

    def foreign_team_access_denied(self, team_id: str, actor_id: str) -> None:
        """Record a request for a team other than the caller's own."""
        ...

    def with_context(self, context: ObservationContext) -> TeamServiceProbe:
        ...


class DefaultTeamServiceProbe(StructlogProbe):
    """Default implementation of TeamServiceProbe using structlog."""

    def foreign_team_access_denied(self, team_id: str, actor_id: str) -> None:
        self._logger.warning(
            "foreign_team_access_denied",
            requested_team_id=team_id,
            actor_id=actor_id,
            **self._get_context_kwargs(),
        )
