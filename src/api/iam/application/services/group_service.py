"""Group application service for IAM bounded context.

Orchestrates group management and the invitation workflow. Only the
owner may change a group; members may read it; everyone else is told
the group does not exist.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.notifier import IamNotifier
from iam.application.observability import DefaultGroupServiceProbe, GroupServiceProbe
from iam.domain.aggregates import Group, GroupInvitation, User
from iam.domain.value_objects import (
    GroupId,
    InvitationId,
    InvitationStatus,
    PendingInvitation,
    UserId,
)
from iam.ports.exceptions import (
    AlreadyGroupMemberError,
    GroupNotFoundError,
    InvitationAlreadyAcceptedError,
    InvitationAlreadyPendingError,
    InvitationNotFoundError,
    UserNotFoundError,
)
from iam.ports.repositories import (
    IGroupRepository,
    IInvitationRepository,
    IUserRepository,
)
from shared_kernel.authorization import Action


class GroupService:
    """Application service for groups, members and invitations.

    Manages database transactions. Invitation acceptance adds the member
    and marks the invitation ACCEPTED in the same transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        group_repository: IGroupRepository,
        user_repository: IUserRepository,
        invitation_repository: IInvitationRepository,
        notifier: IamNotifier,
        probe: GroupServiceProbe | None = None,
    ):
        """Initialize GroupService with dependencies.

        Args:
            session: Database session for transaction management
            group_repository: Repository for group persistence
            user_repository: Repository used to resolve owners, members and invitees
            invitation_repository: Repository for invitation persistence
            notifier: Sends invitation emails once invitations are committed
            probe: Optional domain probe for observability
        """
        self._session = session
        self._group_repository = group_repository
        self._user_repository = user_repository
        self._invitation_repository = invitation_repository
        self._notifier = notifier
        self._probe = probe or DefaultGroupServiceProbe()

    async def list_groups(self, actor_id: UserId) -> list[Group]:
        """List groups the actor owns or belongs to, newest first."""
        async with self._session.begin():
            return await self._group_repository.list_for_user(actor_id)

    async def get_group(self, group_id: GroupId, actor_id: UserId) -> Group:
        """Get a group the actor owns or belongs to.

        Raises:
            GroupNotFoundError: If the group does not exist or is not visible
        """
        async with self._session.begin():
            return await self._load_visible(group_id, actor_id)

    async def create_group(
        self, name: str, actor_id: UserId, description: str | None = None
    ) -> Group:
        """Create a group owned by the actor.

        Raises:
            PermissionError: If the actor has no user record
            ValueError: If the name is invalid
        """
        async with self._session.begin():
            owner = await self._require_actor(actor_id)
            group = Group.create(
                name=name, owner=owner.summary(), description=description
            )
            await self._group_repository.save(group)

        self._probe.group_created(group.id.value, group.name, actor_id.value)
        return group

    async def update_group(
        self,
        group_id: GroupId,
        actor_id: UserId,
        name: str | None = None,
        description: str | None = None,
    ) -> Group:
        """Update name and/or description (owner only).

        Raises:
            GroupNotFoundError: If the group is not visible to the actor
            PermissionError: If the actor is a member but not the owner
        """
        async with self._session.begin():
            group = await self._load_owned(group_id, actor_id, Action.MANAGE)
            group.update_details(name=name, description=description)
            await self._group_repository.save(group)

        self._probe.group_updated(group_id.value)
        return group

    async def delete_group(self, group_id: GroupId, actor_id: UserId) -> None:
        """Delete a group (owner only).

        Raises:
            GroupNotFoundError: If the group is not visible to the actor
            PermissionError: If the actor is a member but not the owner
        """
        async with self._session.begin():
            group = await self._load_owned(group_id, actor_id, Action.DELETE)
            await self._group_repository.delete(group)

        self._probe.group_deleted(group_id.value)

    async def add_member(
        self, group_id: GroupId, actor_id: UserId, user_id: UserId
    ) -> Group:
        """Add a user directly as member (owner only, idempotent).

        Raises:
            GroupNotFoundError: If the group is not visible to the actor
            PermissionError: If the actor is a member but not the owner
            UserNotFoundError: If the user to add does not exist
        """
        async with self._session.begin():
            group = await self._load_owned(group_id, actor_id, Action.MANAGE)
            user = await self._require_user(user_id)
            group.add_member(user.summary())
            await self._group_repository.save(group)

        self._probe.member_added(group_id.value, user_id.value)
        return group

    async def remove_member(
        self, group_id: GroupId, actor_id: UserId, user_id: UserId
    ) -> Group:
        """Remove a member (owner only, idempotent)."""
        async with self._session.begin():
            group = await self._load_owned(group_id, actor_id, Action.MANAGE)
            group.remove_member(user_id)
            await self._group_repository.save(group)

        self._probe.member_removed(group_id.value, user_id.value)
        return group

    async def invite(
        self, group_id: GroupId, actor_id: UserId, username: str
    ) -> GroupInvitation:
        """Invite a user, looked up by username, to join the group.

        A previously DECLINED invitation is re-issued in place (same id,
        status back to PENDING, created_at refreshed).

        Raises:
            GroupNotFoundError: If the group is not visible to the actor
            PermissionError: If the actor is a member but not the owner, or
                has no user record
            UserNotFoundError: If no user has that username
            AlreadyGroupMemberError: If the user owns or belongs to the group
            InvitationAlreadyPendingError: If an invitation is awaiting an answer
            InvitationAlreadyAcceptedError: If the user already accepted once
        """
        async with self._session.begin():
            group = await self._load_owned(group_id, actor_id, Action.INVITE)
            sender = await self._require_actor(actor_id)

            receiver = await self._user_repository.get_by_username(username)
            if receiver is None:
                self._probe.invitation_rejected(group_id.value, username, "unknown_user")
                raise UserNotFoundError(f"User {username} not found")

            if group.is_owner(receiver.id) or group.has_member(receiver.id):
                self._probe.invitation_rejected(group_id.value, username, "already_member")
                raise AlreadyGroupMemberError(
                    f"{username} is already a member of this group"
                )

            invitation = await self._invitation_repository.get_for_receiver(
                group.id, receiver.id
            )
            reissued = invitation is not None
            if invitation is None:
                invitation = GroupInvitation.create(
                    group_id=group.id,
                    group_name=group.name,
                    sender_id=sender.id,
                    sender_username=sender.username,
                    receiver_id=receiver.id,
                    receiver_email=receiver.email,
                )
            elif invitation.status == InvitationStatus.PENDING:
                self._probe.invitation_rejected(group_id.value, username, "pending")
                raise InvitationAlreadyPendingError(
                    f"An invitation for {username} is already pending"
                )
            elif invitation.status == InvitationStatus.ACCEPTED:
                self._probe.invitation_rejected(group_id.value, username, "accepted")
                raise InvitationAlreadyAcceptedError(
                    f"{username} has already accepted an invitation to this group"
                )
            else:
                invitation.reissue(
                    sender_id=sender.id,
                    group_name=group.name,
                    sender_username=sender.username,
                    receiver_email=receiver.email,
                )

            await self._invitation_repository.save(invitation)

        self._probe.invitation_sent(
            invitation.id.value, group_id.value, receiver.id.value, reissued
        )
        await self._notifier.dispatch(invitation.collect_events())
        return invitation

    async def respond(
        self, invitation_id: InvitationId, actor_id: UserId, accept: bool
    ) -> GroupInvitation:
        """Accept or decline an invitation addressed to the actor.

        Raises:
            InvitationNotFoundError: If the invitation does not exist or is
                addressed to someone else
            PermissionError: If the actor has no user record
            ValueError: If the invitation was already answered
        """
        async with self._session.begin():
            invitation = await self._invitation_repository.get_by_id(invitation_id)
            if invitation is None or invitation.receiver_id != actor_id:
                raise InvitationNotFoundError(f"Invitation {invitation_id} not found")

            if accept:
                invitation.accept()
                group = await self._group_repository.get_by_id(invitation.group_id)
                if group is None:
                    raise InvitationNotFoundError(
                        f"Invitation {invitation_id} not found"
                    )
                receiver = await self._require_actor(actor_id)
                group.add_member(receiver.summary())
                await self._group_repository.save(group)
            else:
                invitation.decline()

            await self._invitation_repository.save(invitation)

        self._probe.invitation_answered(
            invitation.id.value, invitation.group_id.value, invitation.status.value
        )
        return invitation

    async def list_notifications(self, actor_id: UserId) -> list[PendingInvitation]:
        """PENDING invitations addressed to the actor, newest first."""
        async with self._session.begin():
            return await self._invitation_repository.list_pending_for_receiver(
                actor_id
            )

    async def _load_visible(self, group_id: GroupId, actor_id: UserId) -> Group:
        group = await self._group_repository.get_by_id(group_id)
        if group is None or not group.is_visible_to(actor_id):
            raise GroupNotFoundError(f"Group {group_id} not found")
        return group

    async def _load_owned(
        self, group_id: GroupId, actor_id: UserId, action: Action
    ) -> Group:
        group = await self._load_visible(group_id, actor_id)
        if not group.is_owner(actor_id):
            self._probe.permission_denied(group_id.value, actor_id.value, action)
            raise PermissionError("Only the group owner can perform this action")
        return group

    async def _require_user(self, user_id: UserId) -> User:
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    async def _require_actor(self, actor_id: UserId) -> User:
        actor = await self._user_repository.get_by_id(actor_id)
        if actor is None:
            raise PermissionError("Unknown user")
        return actor
