"""Group invitation domain events for IAM context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class InvitationSent:
    """Event raised when an invitation enters PENDING (new or re-sent).

    Carries everything the invitation email needs so the notifier does
    not have to look anything up.

    Attributes:
        invitation_id: The ULID of the invitation
        group_id: The ULID of the group
        group_name: Name of the group at send time
        sender_username: Username of the inviting owner
        receiver_email: Address the email is delivered to
        occurred_at: When the event occurred (UTC)
    """

    invitation_id: str
    group_id: str
    group_name: str
    sender_username: str
    receiver_email: str
    occurred_at: datetime
