"""PostgreSQL implementation of IInvitationRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import GroupInvitation
from iam.domain.value_objects import (
    GroupId,
    InvitationId,
    InvitationStatus,
    PendingInvitation,
    UserId,
)
from iam.infrastructure.models import GroupInvitationModel, GroupModel, UserModel
from iam.infrastructure.observability import (
    DefaultInvitationRepositoryProbe,
    InvitationRepositoryProbe,
)
from iam.ports.exceptions import InvitationAlreadyPendingError
from iam.ports.repositories import IInvitationRepository

_UNIQUE_RECEIVER = "uq_group_invitations_group_receiver"


def _to_domain(model: GroupInvitationModel) -> GroupInvitation:
    return GroupInvitation(
        id=InvitationId(value=model.id),
        group_id=GroupId(value=model.group_id),
        sender_id=UserId(value=model.sender_id),
        receiver_id=UserId(value=model.receiver_id),
        status=InvitationStatus(model.status),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class InvitationRepository(IInvitationRepository):
    """PostgreSQL-backed repository for GroupInvitation aggregates.

    Re-issued invitations are written back to their existing row, so the
    (group_id, receiver_id) unique constraint is never violated by a
    legitimate re-invite.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: InvitationRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultInvitationRepositoryProbe()

    async def save(self, invitation: GroupInvitation) -> None:
        stmt = select(GroupInvitationModel).where(
            GroupInvitationModel.id == invitation.id.value
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.status = invitation.status.value
            model.sender_id = invitation.sender_id.value
            model.created_at = invitation.created_at
            model.updated_at = invitation.updated_at
        else:
            self._session.add(
                GroupInvitationModel(
                    id=invitation.id.value,
                    group_id=invitation.group_id.value,
                    sender_id=invitation.sender_id.value,
                    receiver_id=invitation.receiver_id.value,
                    status=invitation.status.value,
                    created_at=invitation.created_at,
                    updated_at=invitation.updated_at,
                )
            )

        try:
            await self._session.flush()
        except IntegrityError as e:
            if _UNIQUE_RECEIVER in str(e.orig):
                self._probe.duplicate_invitation(
                    invitation.group_id.value, invitation.receiver_id.value
                )
                raise InvitationAlreadyPendingError(
                    "An invitation for this user is already pending"
                ) from e
            raise

        self._probe.invitation_saved(invitation.id.value, invitation.status.value)

    async def get_by_id(self, invitation_id: InvitationId) -> GroupInvitation | None:
        stmt = select(GroupInvitationModel).where(
            GroupInvitationModel.id == invitation_id.value
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.invitation_not_found(invitation_id.value)
            return None

        return _to_domain(model)

    async def get_for_receiver(
        self, group_id: GroupId, receiver_id: UserId
    ) -> GroupInvitation | None:
        stmt = select(GroupInvitationModel).where(
            GroupInvitationModel.group_id == group_id.value,
            GroupInvitationModel.receiver_id == receiver_id.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def list_pending_for_receiver(
        self, receiver_id: UserId
    ) -> list[PendingInvitation]:
        stmt = (
            select(GroupInvitationModel, GroupModel.name, UserModel.username)
            .join(GroupModel, GroupModel.id == GroupInvitationModel.group_id)
            .join(UserModel, UserModel.id == GroupInvitationModel.sender_id)
            .where(
                GroupInvitationModel.receiver_id == receiver_id.value,
                GroupInvitationModel.status == InvitationStatus.PENDING.value,
            )
            .order_by(GroupInvitationModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [
            PendingInvitation(
                invitation_id=InvitationId(value=model.id),
                group_id=GroupId(value=model.group_id),
                group_name=group_name,
                sender_username=sender_username,
                created_at=model.created_at,
            )
            for model, group_name, sender_username in result.all()
        ]
