"""Domain probes for IAM repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events of the user, team, group, invitation and
password reset repositories.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations."""

    def user_saved(self, user_id: str, username: str) -> None:
        ...

    def user_not_found(self, lookup: str, value: str) -> None:
        """Record that a lookup by id, email or username found nothing."""
        ...

    def duplicate_user(self, field: str, value: str) -> None:
        """Record that a save collided with a unique email or username."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        ...


class TeamRepositoryProbe(Protocol):
    """Domain probe for team repository operations."""

    def team_saved(self, team_id: str, name: str) -> None:
        ...

    def team_not_found(self, team_id: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> TeamRepositoryProbe:
        ...


class GroupRepositoryProbe(Protocol):
    """Domain probe for group repository operations."""

    def group_saved(self, group_id: str, member_count: int) -> None:
        ...

    def group_retrieved(self, group_id: str, member_count: int) -> None:
        ...

    def group_not_found(self, group_id: str) -> None:
        ...

    def group_deleted(self, group_id: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> GroupRepositoryProbe:
        ...


class InvitationRepositoryProbe(Protocol):
    """Domain probe for group invitation repository operations."""

    def invitation_saved(self, invitation_id: str, status: str) -> None:
        ...

    def invitation_not_found(self, invitation_id: str) -> None:
        ...

    def duplicate_invitation(self, group_id: str, receiver_id: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> InvitationRepositoryProbe:
        ...


class PasswordResetTokenRepositoryProbe(Protocol):
    """Domain probe for password reset token repository operations."""

    def reset_token_saved(self, user_id: str) -> None:
        ...

    def reset_tokens_deleted(self, user_id: str, count: int) -> None:
        ...

    def with_context(
        self, context: ObservationContext
    ) -> PasswordResetTokenRepositoryProbe:
        ...


class DefaultUserRepositoryProbe(StructlogProbe):
    """Default implementation of UserRepositoryProbe using structlog."""

    def user_saved(self, user_id: str, username: str) -> None:
        self._logger.info(
            "user_saved",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, lookup: str, value: str) -> None:
        self._logger.debug(
            "user_not_found",
            lookup=lookup,
            value=value,
            **self._get_context_kwargs(),
        )

    def duplicate_user(self, field: str, value: str) -> None:
        self._logger.warning(
            "duplicate_user",
            field=field,
            value=value,
            **self._get_context_kwargs(),
        )


class DefaultTeamRepositoryProbe(StructlogProbe):
    """Default implementation of TeamRepositoryProbe using structlog."""

    def team_saved(self, team_id: str, name: str) -> None:
        self._logger.info(
            "team_saved",
            saved_team_id=team_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def team_not_found(self, team_id: str) -> None:
        self._logger.debug(
            "team_not_found",
            missing_team_id=team_id,
            **self._get_context_kwargs(),
        )


class DefaultGroupRepositoryProbe(StructlogProbe):
    """Default implementation of GroupRepositoryProbe using structlog."""

    def group_saved(self, group_id: str, member_count: int) -> None:
        self._logger.info(
            "group_saved",
            group_id=group_id,
            member_count=member_count,
            **self._get_context_kwargs(),
        )

    def group_retrieved(self, group_id: str, member_count: int) -> None:
        self._logger.debug(
            "group_retrieved",
            group_id=group_id,
            member_count=member_count,
            **self._get_context_kwargs(),
        )

    def group_not_found(self, group_id: str) -> None:
        self._logger.debug(
            "group_not_found",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_deleted(self, group_id: str) -> None:
        self._logger.info(
            "group_deleted",
            group_id=group_id,
            **self._get_context_kwargs(),
        )


class DefaultInvitationRepositoryProbe(StructlogProbe):
    """Default implementation of InvitationRepositoryProbe using structlog."""

    def invitation_saved(self, invitation_id: str, status: str) -> None:
        self._logger.info(
            "invitation_saved",
            invitation_id=invitation_id,
            status=status,
            **self._get_context_kwargs(),
        )

    def invitation_not_found(self, invitation_id: str) -> None:
        self._logger.debug(
            "invitation_not_found",
            invitation_id=invitation_id,
            **self._get_context_kwargs(),
        )

    def duplicate_invitation(self, group_id: str, receiver_id: str) -> None:
        self._logger.warning(
            "duplicate_invitation",
            group_id=group_id,
            receiver_id=receiver_id,
            **self._get_context_kwargs(),
        )


class DefaultPasswordResetTokenRepositoryProbe(StructlogProbe):
    """Default implementation of PasswordResetTokenRepositoryProbe using structlog."""

    def reset_token_saved(self, user_id: str) -> None:
        self._logger.info(
            "password_reset_token_saved",
            account_id=user_id,
            **self._get_context_kwargs(),
        )

    def reset_tokens_deleted(self, user_id: str, count: int) -> None:
        self._logger.info(
            "password_reset_tokens_deleted",
            account_id=user_id,
            count=count,
            **self._get_context_kwargs(),
        )
