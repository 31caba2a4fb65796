"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations never commit; the calling service owns the
transaction.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import (
    Group,
    GroupInvitation,
    PasswordResetToken,
    Team,
    User,
)
from iam.domain.value_objects import (
    GroupId,
    InvitationId,
    PendingInvitation,
    TeamId,
    UserId,
)


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence."""

    async def save(self, user: User) -> None:
        """Persist a user aggregate (insert or update).

        Raises:
            DuplicateEmailError: If the email is registered to another user
            DuplicateUsernameError: If the username is taken by another user
        """
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by email (case-insensitive)."""
        ...

    async def get_by_username(self, username: str) -> User | None:
        ...

    async def list_by_team(self, team_id: TeamId) -> list[User]:
        """List the members of a team ordered by username."""
        ...


@runtime_checkable
class ITeamRepository(Protocol):
    """Repository for Team aggregate persistence."""

    async def save(self, team: Team) -> None:
        ...

    async def get_by_id(self, team_id: TeamId) -> Team | None:
        ...


@runtime_checkable
class IGroupRepository(Protocol):
    """Repository for Group aggregate persistence.

    Returns fully hydrated Group aggregates, owner and members included.
    """

    async def save(self, group: Group) -> None:
        """Persist group details and reconcile the member set."""
        ...

    async def get_by_id(self, group_id: GroupId) -> Group | None:
        ...

    async def list_for_user(self, user_id: UserId) -> list[Group]:
        """List groups the user owns or is a member of, newest first."""
        ...

    async def list_ids_for_user(self, user_id: UserId) -> list[GroupId]:
        """Ids of groups the user owns or is a member of."""
        ...

    async def delete(self, group: Group) -> bool:
        """Delete a group, its memberships and its invitations.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IInvitationRepository(Protocol):
    """Repository for GroupInvitation aggregate persistence.

    At most one invitation exists per (group, receiver).
    """

    async def save(self, invitation: GroupInvitation) -> None:
        ...

    async def get_by_id(self, invitation_id: InvitationId) -> GroupInvitation | None:
        ...

    async def get_for_receiver(
        self, group_id: GroupId, receiver_id: UserId
    ) -> GroupInvitation | None:
        """Retrieve the invitation record for a (group, receiver) pair."""
        ...

    async def list_pending_for_receiver(
        self, receiver_id: UserId
    ) -> list[PendingInvitation]:
        """PENDING invitations addressed to the user, newest first."""
        ...


@runtime_checkable
class IPasswordResetTokenRepository(Protocol):
    """Repository for PasswordResetToken persistence."""

    async def save(self, token: PasswordResetToken) -> None:
        ...

    async def get_by_hash(self, token_hash: str) -> PasswordResetToken | None:
        ...

    async def delete(self, token: PasswordResetToken) -> None:
        ...

    async def delete_for_user(self, user_id: UserId) -> int:
        """Delete every outstanding token of the user.

        Returns:
            Number of tokens deleted
        """
        ...
