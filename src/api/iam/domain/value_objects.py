"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from shared_kernel.identifiers import UlidIdentifier


@dataclass(frozen=True)
class UserId(UlidIdentifier):
    """Identifier for a User aggregate."""


@dataclass(frozen=True)
class TeamId(UlidIdentifier):
    """Identifier for a Team aggregate."""


@dataclass(frozen=True)
class GroupId(UlidIdentifier):
    """Identifier for a Group aggregate."""


@dataclass(frozen=True)
class InvitationId(UlidIdentifier):
    """Identifier for a GroupInvitation aggregate."""


@dataclass(frozen=True)
class PasswordResetTokenId(UlidIdentifier):
    """Identifier for a PasswordResetToken aggregate."""


class Role(StrEnum):
    """Account-wide role of a user.

    ADMIN is granted to the user who creates a team at signup and unlocks
    privileged idea operations (update, sideline, delete any in-scope idea).
    """

    MEMBER = "MEMBER"
    ADMIN = "ADMIN"


class InvitationStatus(StrEnum):
    """Lifecycle states of a group invitation.

    PENDING -> ACCEPTED | DECLINED, and DECLINED -> PENDING on re-invite.
    ACCEPTED is terminal.
    """

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


@dataclass(frozen=True)
class UserSummary:
    """Public projection of a user embedded in other aggregates."""

    id: UserId
    email: str
    username: str


@dataclass(frozen=True)
class PendingInvitation:
    """Read model for an invitation awaiting the receiver's response."""

    invitation_id: InvitationId
    group_id: GroupId
    group_name: str
    sender_username: str
    created_at: datetime
