"""Protocol for group application service observability.

Defines the interface for domain probes that capture application-level
domain events for group and invitation operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupServiceProbe(Protocol):
    """Domain probe for group application service operations."""

    def group_created(self, group_id: str, name: str, owner_id: str) -> None:
        ...

    def group_updated(self, group_id: str) -> None:
        ...

    def group_deleted(self, group_id: str) -> None:
        ...

    def member_added(self, group_id: str, member_id: str) -> None:
        ...

    def member_removed(self, group_id: str, member_id: str) -> None:
        ...

    def permission_denied(self, group_id: str, actor_id: str, action: str) -> None:
        """Record that a member attempted an owner-only operation."""
        ...

    def invitation_sent(
        self, invitation_id: str, group_id: str, receiver_id: str, reissued: bool
    ) -> None:
        ...

    def invitation_rejected(self, group_id: str, username: str, reason: str) -> None:
        """Record that an invitation could not be created."""
        ...

    def invitation_answered(
        self, invitation_id: str, group_id: str, status: str
    ) -> None:
        ...

    def with_context(self, context: ObservationContext) -> GroupServiceProbe:
        ...


class DefaultGroupServiceProbe(StructlogProbe):
    """Default implementation of GroupServiceProbe using structlog."""

    def group_created(self, group_id: str, name: str, owner_id: str) -> None:
        self._logger.info(
            "group_created",
            group_id=group_id,
            name=name,
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )

    def group_updated(self, group_id: str) -> None:
        self._logger.info(
            "group_updated",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_deleted(self, group_id: str) -> None:
        self._logger.info(
            "group_deleted",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def member_added(self, group_id: str, member_id: str) -> None:
        self._logger.info(
            "group_member_added",
            group_id=group_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def member_removed(self, group_id: str, member_id: str) -> None:
        self._logger.info(
            "group_member_removed",
            group_id=group_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def permission_denied(self, group_id: str, actor_id: str, action: str) -> None:
        self._logger.warning(
            "group_permission_denied",
            group_id=group_id,
            actor_id=actor_id,
            action=action,
            **self._get_context_kwargs(),
        )

    def invitation_sent(
        self, invitation_id: str, group_id: str, receiver_id: str, reissued: bool
    ) -> None:
        self._logger.info(
            "group_invitation_sent",
            invitation_id=invitation_id,
            group_id=group_id,
            receiver_id=receiver_id,
            reissued=reissued,
            **self._get_context_kwargs(),
        )

    def invitation_rejected(self, group_id: str, username: str, reason: str) -> None:
        self._logger.info(
            "group_invitation_rejected",
            group_id=group_id,
            username=username,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def invitation_answered(
        self, invitation_id: str, group_id: str, status: str
    ) -> None:
        self._logger.info(
            "group_invitation_answered",
            invitation_id=invitation_id,
            group_id=group_id,
            status=status,
            **self._get_context_kwargs(),
        )
