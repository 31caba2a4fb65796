"""Group invitation aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from iam.domain.events import InvitationSent
from iam.domain.value_objects import (
    GroupId,
    InvitationId,
    InvitationStatus,
    UserId,
)

if TYPE_CHECKING:
    from iam.domain.events import DomainEvent


@dataclass
class GroupInvitation:
    """Invitation for a user to join a group.

    There is at most one invitation per (group, receiver). State machine:

        (none) -> PENDING -> ACCEPTED | DECLINED
        DECLINED -> PENDING    via reissue(), same record

    ACCEPTED is terminal. Every transition into PENDING records an
    InvitationSent event, which drives the invitation email.
    """

    id: InvitationId
    group_id: GroupId
    sender_id: UserId
    receiver_id: UserId
    status: InvitationStatus = InvitationStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def create(
        cls,
        group_id: GroupId,
        group_name: str,
        sender_id: UserId,
        sender_username: str,
        receiver_id: UserId,
        receiver_email: str,
    ) -> GroupInvitation:
        """Issue a new PENDING invitation."""
        if sender_id == receiver_id:
            raise ValueError("Cannot invite yourself")
        invitation = cls(
            id=InvitationId.generate(),
            group_id=group_id,
            sender_id=sender_id,
            receiver_id=receiver_id,
        )
        invitation._record_sent(group_name, sender_username, receiver_email)
        return invitation

    def reissue(
        self,
        sender_id: UserId,
        group_name: str,
        sender_username: str,
        receiver_email: str,
    ) -> None:
        """Move a DECLINED invitation back to PENDING.

        The record keeps its id; created_at is refreshed so the invitation
        sorts as new in the receiver's notifications.

        Raises:
            ValueError: If the invitation is not DECLINED
        """
        if self.status != InvitationStatus.DECLINED:
            raise ValueError(
                f"Only declined invitations can be re-sent (status: {self.status})"
            )
        now = datetime.now(UTC)
        self.status = InvitationStatus.PENDING
        self.sender_id = sender_id
        self.created_at = now
        self.updated_at = now
        self._record_sent(group_name, sender_username, receiver_email)

    def accept(self) -> None:
        """Mark the invitation ACCEPTED.

        The caller adds the receiver to the group in the same transaction.

        Raises:
            ValueError: If the invitation is not PENDING
        """
        self._ensure_pending()
        self.status = InvitationStatus.ACCEPTED
        self.updated_at = datetime.now(UTC)

    def decline(self) -> None:
        """Mark the invitation DECLINED.

        Raises:
            ValueError: If the invitation is not PENDING
        """
        self._ensure_pending()
        self.status = InvitationStatus.DECLINED
        self.updated_at = datetime.now(UTC)

    @property
    def is_pending(self) -> bool:
        return self.status == InvitationStatus.PENDING

    def _ensure_pending(self) -> None:
        if not self.is_pending:
            raise ValueError(
                f"Invitation has already been responded to (status: {self.status})"
            )

    def _record_sent(
        self, group_name: str, sender_username: str, receiver_email: str
    ) -> None:
        self._pending_events.append(
            InvitationSent(
                invitation_id=self.id.value,
                group_id=self.group_id.value,
                group_name=group_name,
                sender_username=sender_username,
                receiver_email=receiver_email,
                occurred_at=self.created_at,
            )
        )

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
