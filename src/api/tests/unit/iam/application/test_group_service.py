"""Unit tests for GroupService (groups, members and invitations)."""

from unittest.mock import create_autospec

import pytest

from iam.application.notifier import IamNotifier
from iam.application.observability import GroupServiceProbe
from iam.application.services import GroupService
from iam.domain.aggregates import Group, GroupInvitation, User
from iam.domain.events import InvitationSent
from iam.domain.value_objects import InvitationId, InvitationStatus
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


def _user(username: str) -> User:
    return User.register(email=f"{username}@example.com", password_hash="x")


@pytest.fixture
def owner() -> User:
    return _user("owner")


@pytest.fixture
def member() -> User:
    return _user("member")


@pytest.fixture
def outsider() -> User:
    return _user("outsider")


@pytest.fixture
def group(owner, member) -> Group:
    group = Group.create(name="Platform", owner=owner.summary())
    group.add_member(member.summary())
    return group


@pytest.fixture
def group_repository(group):
    repo = create_autospec(IGroupRepository, instance=True)
    repo.get_by_id.return_value = group
    return repo


@pytest.fixture
def user_repository(owner, member, outsider):
    users = {u.id: u for u in (owner, member, outsider)}
    by_name = {u.username: u for u in (owner, member, outsider)}
    repo = create_autospec(IUserRepository, instance=True)
    repo.get_by_id.side_effect = lambda user_id: users.get(user_id)
    repo.get_by_username.side_effect = lambda name: by_name.get(name)
    return repo


@pytest.fixture
def invitation_repository():
    repo = create_autospec(IInvitationRepository, instance=True)
    repo.get_for_receiver.return_value = None
    return repo


@pytest.fixture
def notifier():
    return create_autospec(IamNotifier, instance=True)


@pytest.fixture
def probe():
    return create_autospec(GroupServiceProbe, instance=True)


@pytest.fixture
def group_service(
    mock_session,
    group_repository,
    user_repository,
    invitation_repository,
    notifier,
    probe,
):
    return GroupService(
        session=mock_session,
        group_repository=group_repository,
        user_repository=user_repository,
        invitation_repository=invitation_repository,
        notifier=notifier,
        probe=probe,
    )


class TestGroupVisibility:
    @pytest.mark.asyncio
    async def test_member_can_read(self, group_service, group, member):
        assert await group_service.get_group(group.id, member.id) == group

    @pytest.mark.asyncio
    async def test_outsider_gets_not_found(self, group_service, group, outsider):
        with pytest.raises(GroupNotFoundError):
            await group_service.get_group(group.id, outsider.id)

    @pytest.mark.asyncio
    async def test_missing_group(self, group_service, group_repository, group, owner):
        group_repository.get_by_id.return_value = None

        with pytest.raises(GroupNotFoundError):
            await group_service.get_group(group.id, owner.id)


class TestGroupManagement:
    @pytest.mark.asyncio
    async def test_create_sets_owner(self, group_service, group_repository, owner, probe):
        created = await group_service.create_group(
            name="Research", actor_id=owner.id, description="R&D"
        )

        assert created.owner == owner.summary()
        assert created.description == "R&D"
        assert created.members == []
        group_repository.save.assert_awaited_once_with(created)
        probe.group_created.assert_called_once_with(
            created.id.value, "Research", owner.id.value
        )

    @pytest.mark.asyncio
    async def test_create_without_account_is_forbidden(
        self, group_service, group_repository
    ):
        from iam.domain.value_objects import UserId

        with pytest.raises(PermissionError, match="Unknown user"):
            await group_service.create_group(name="Research", actor_id=UserId.generate())

        group_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owner_updates(self, group_service, group, owner):
        updated = await group_service.update_group(group.id, owner.id, name="Infra")

        assert updated.name == "Infra"

    @pytest.mark.asyncio
    async def test_member_cannot_update(self, group_service, group, member, probe):
        with pytest.raises(PermissionError):
            await group_service.update_group(group.id, member.id, name="Infra")

        probe.permission_denied.assert_called_once_with(
            group.id.value, member.id.value, Action.MANAGE
        )

    @pytest.mark.asyncio
    async def test_outsider_cannot_delete_and_sees_not_found(
        self, group_service, group, outsider, group_repository
    ):
        with pytest.raises(GroupNotFoundError):
            await group_service.delete_group(group.id, outsider.id)

        group_repository.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owner_deletes(self, group_service, group, owner, group_repository):
        await group_service.delete_group(group.id, owner.id)

        group_repository.delete.assert_awaited_once_with(group)

    @pytest.mark.asyncio
    async def test_add_member(self, group_service, group, owner, outsider):
        updated = await group_service.add_member(group.id, owner.id, outsider.id)

        assert updated.has_member(outsider.id)

    @pytest.mark.asyncio
    async def test_add_unknown_member(self, group_service, group, owner):
        from iam.domain.value_objects import UserId

        with pytest.raises(UserNotFoundError):
            await group_service.add_member(group.id, owner.id, UserId.generate())

    @pytest.mark.asyncio
    async def test_remove_member(self, group_service, group, owner, member):
        updated = await group_service.remove_member(group.id, owner.id, member.id)

        assert not updated.has_member(member.id)


class TestInvite:
    @pytest.mark.asyncio
    async def test_new_invitation_is_emailed(
        self, group_service, group, owner, outsider, invitation_repository, notifier
    ):
        invitation = await group_service.invite(group.id, owner.id, "outsider")

        assert invitation.status == InvitationStatus.PENDING
        assert invitation.receiver_id == outsider.id
        invitation_repository.save.assert_awaited_once_with(invitation)
        (events,) = notifier.dispatch.await_args.args
        assert [type(e) for e in events] == [InvitationSent]
        assert events[0].receiver_email == "outsider@example.com"

    @pytest.mark.asyncio
    async def test_only_owner_can_invite(self, group_service, group, member):
        with pytest.raises(PermissionError):
            await group_service.invite(group.id, member.id, "outsider")

    @pytest.mark.asyncio
    async def test_unknown_username(self, group_service, group, owner):
        with pytest.raises(UserNotFoundError):
            await group_service.invite(group.id, owner.id, "ghost")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username", ["member", "owner"])
    async def test_existing_member_or_owner(self, group_service, group, owner, username):
        with pytest.raises(AlreadyGroupMemberError):
            await group_service.invite(group.id, owner.id, username)

    @pytest.mark.asyncio
    async def test_pending_invitation_conflicts(
        self, group_service, group, owner, outsider, invitation_repository, notifier
    ):
        invitation_repository.get_for_receiver.return_value = GroupInvitation.create(
            group_id=group.id,
            group_name=group.name,
            sender_id=owner.id,
            sender_username=owner.username,
            receiver_id=outsider.id,
            receiver_email=outsider.email,
        )

        with pytest.raises(InvitationAlreadyPendingError):
            await group_service.invite(group.id, owner.id, "outsider")

        notifier.dispatch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_accepted_invitation_conflicts(
        self, group_service, group, owner, outsider, invitation_repository
    ):
        existing = GroupInvitation.create(
            group_id=group.id,
            group_name=group.name,
            sender_id=owner.id,
            sender_username=owner.username,
            receiver_id=outsider.id,
            receiver_email=outsider.email,
        )
        existing.accept()
        invitation_repository.get_for_receiver.return_value = existing

        with pytest.raises(InvitationAlreadyAcceptedError):
            await group_service.invite(group.id, owner.id, "outsider")

    @pytest.mark.asyncio
    async def test_declined_invitation_is_reissued(
        self, group_service, group, owner, outsider, invitation_repository, probe
    ):
        existing = GroupInvitation.create(
            group_id=group.id,
            group_name=group.name,
            sender_id=owner.id,
            sender_username=owner.username,
            receiver_id=outsider.id,
            receiver_email=outsider.email,
        )
        existing.decline()
        existing.collect_events()
        invitation_repository.get_for_receiver.return_value = existing

        invitation = await group_service.invite(group.id, owner.id, "outsider")

        assert invitation.id == existing.id
        assert invitation.status == InvitationStatus.PENDING
        probe.invitation_sent.assert_called_once_with(
            existing.id.value, group.id.value, outsider.id.value, True
        )


class TestRespond:
    @pytest.fixture
    def pending(self, group, owner, outsider, invitation_repository) -> GroupInvitation:
        invitation = GroupInvitation.create(
            group_id=group.id,
            group_name=group.name,
            sender_id=owner.id,
            sender_username=owner.username,
            receiver_id=outsider.id,
            receiver_email=outsider.email,
        )
        invitation_repository.get_by_id.return_value = invitation
        return invitation

    @pytest.mark.asyncio
    async def test_accept_adds_member(
        self, group_service, pending, group, outsider, group_repository
    ):
        result = await group_service.respond(pending.id, outsider.id, accept=True)

        assert result.status == InvitationStatus.ACCEPTED
        assert group.has_member(outsider.id)
        group_repository.save.assert_awaited_once_with(group)

    @pytest.mark.asyncio
    async def test_decline(self, group_service, pending, group, outsider, group_repository):
        result = await group_service.respond(pending.id, outsider.id, accept=False)

        assert result.status == InvitationStatus.DECLINED
        assert not group.has_member(outsider.id)
        group_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_users_invitation_is_not_found(
        self, group_service, pending, member
    ):
        with pytest.raises(InvitationNotFoundError):
            await group_service.respond(pending.id, member.id, accept=True)

    @pytest.mark.asyncio
    async def test_missing_invitation(self, group_service, invitation_repository, outsider):
        invitation_repository.get_by_id.return_value = None

        with pytest.raises(InvitationNotFoundError):
            await group_service.respond(InvitationId.generate(), outsider.id, accept=True)

    @pytest.mark.asyncio
    async def test_second_response_is_rejected(self, group_service, pending, outsider):
        pending.decline()

        with pytest.raises(ValueError, match="already been responded"):
            await group_service.respond(pending.id, outsider.id, accept=True)
