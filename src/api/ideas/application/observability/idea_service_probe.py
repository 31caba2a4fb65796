"""Protocol for idea application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IdeaServiceProbe(Protocol):
    """Domain probe for idea lifecycle operations."""

    def idea_created(
        self, idea_id: str, numbering_scope: str, idea_number: int, global_counter: int
    ) -> None:
        ...

    def idea_updated(self, idea_id: str) -> None:
        ...

    def idea_sideline_toggled(self, idea_id: str, is_sidelined: bool) -> None:
        ...

    def idea_deleted(self, idea_id: str) -> None:
        ...

    def collaborator_added(self, idea_id: str, user_id: str) -> None:
        ...

    def collaborator_removed(self, idea_id: str, user_id: str) -> None:
        ...

    def permission_denied(self, idea_id: str, actor_id: str, action: str) -> None:
        """Record that an in-scope actor was refused an operation."""
        ...

    def with_context(self, context: ObservationContext) -> IdeaServiceProbe:
        ...


class DefaultIdeaServiceProbe(StructlogProbe):
    """Default implementation of IdeaServiceProbe using structlog."""

    def idea_created(
        self, idea_id: str, numbering_scope: str, idea_number: int, global_counter: int
    ) -> None:
        self._logger.info(
            "idea_created",
            idea_id=idea_id,
            numbering_scope=numbering_scope,
            idea_number=idea_number,
            global_counter=global_counter,
            **self._get_context_kwargs(),
        )

    def idea_updated(self, idea_id: str) -> None:
        self._logger.info(
            "idea_updated",
            idea_id=idea_id,
            **self._get_context_kwargs(),
        )

    def idea_sideline_toggled(self, idea_id: str, is_sidelined: bool) -> None:
        self._logger.info(
            "idea_sideline_toggled",
            idea_id=idea_id,
            is_sidelined=is_sidelined,
            **self._get_context_kwargs(),
        )

    def idea_deleted(self, idea_id: str) -> None:
        self._logger.info(
            "idea_deleted",
            idea_id=idea_id,
            **self._get_context_kwargs(),
        )

    def collaborator_added(self, idea_id: str, user_id: str) -> None:
        self._logger.info(
            "collaborator_added",
            idea_id=idea_id,
            collaborator_id=user_id,
            **self._get_context_kwargs(),
        )

    def collaborator_removed(self, idea_id: str, user_id: str) -> None:
        self._logger.info(
            "collaborator_removed",
            idea_id=idea_id,
            collaborator_id=user_id,
            **self._get_context_kwargs(),
        )

    def permission_denied(self, idea_id: str, actor_id: str, action: str) -> None:
        self._logger.warning(
            "idea_permission_denied",
            idea_id=idea_id,
            actor_id=actor_id,
            action=action,
            **self._get_context_kwargs(),
        )
