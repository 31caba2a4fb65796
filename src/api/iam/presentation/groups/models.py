"""Pydantic models for group API requests and responses."""

from __future__ import annotations

from pydantic import Field

from iam.domain.aggregates import Group, GroupInvitation
from iam.presentation.auth.models import UserSummaryResponse
from shared_kernel.api_models import CamelModel


class CreateGroupRequest(CamelModel):
    """Request model for creating a group owned by the caller."""

    name: str = Field(..., description="Group name", min_length=1, max_length=255)
    description: str | None = Field(default=None, description="Group description")


class UpdateGroupRequest(CamelModel):
    """Request model for updating group metadata. Omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class AddGroupMemberRequest(CamelModel):
    user_id: str = Field(..., description="User ID to add", min_length=1)


class InviteToGroupRequest(CamelModel):
    username: str = Field(..., description="Username of the invitee", min_length=1)


class RespondToInvitationRequest(CamelModel):
    accept: bool = Field(..., description="True to join the group, false to decline")


class GroupResponse(CamelModel):
    """Response model for group."""

    id: str = Field(..., description="Group ID (ULID format)")
    name: str
    description: str
    owner: UserSummaryResponse
    members: list[UserSummaryResponse] = Field(default_factory=list)
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, group: Group) -> GroupResponse:
        """Convert domain Group aggregate to API response."""
        return cls(
            id=group.id.value,
            name=group.name,
            description=group.description,
            owner=UserSummaryResponse.from_domain(group.owner),
            members=[UserSummaryResponse.from_domain(m) for m in group.members],
            created_at=group.created_at.isoformat(),
            updated_at=group.updated_at.isoformat(),
        )


class InvitationResponse(CamelModel):
    """Response model for a group invitation."""

    id: str
    group_id: str
    sender_id: str
    receiver_id: str
    status: str
    created_at: str

    @classmethod
    def from_domain(cls, invitation: GroupInvitation) -> InvitationResponse:
        return cls(
            id=invitation.id.value,
            group_id=invitation.group_id.value,
            sender_id=invitation.sender_id.value,
            receiver_id=invitation.receiver_id.value,
            status=invitation.status.value,
            created_at=invitation.created_at.isoformat(),
        )
