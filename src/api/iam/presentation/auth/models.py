"""Pydantic models for account API requests and responses."""

from __future__ import annotations

from pydantic import EmailStr, Field

from iam.application.security import MIN_PASSWORD_LENGTH
from iam.application.value_objects import Account, AuthSession
from iam.domain.aggregates import Team, User
from iam.domain.value_objects import PendingInvitation, Role, UserSummary
from shared_kernel.api_models import CamelModel


class SignupRequest(CamelModel):
    """Request model for creating an account.

    Supplying ``teamName`` without ``teamId`` creates a new team and makes
    the new user its ADMIN.
    """

    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    username: str | None = Field(default=None, max_length=50)
    team_name: str | None = Field(default=None, max_length=255)
    team_id: str | None = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=50)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class RequestPasswordResetRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class TeamResponse(CamelModel):
    id: str
    name: str

    @classmethod
    def from_domain(cls, team: Team) -> TeamResponse:
        return cls(id=team.id.value, name=team.name)


class UserSummaryResponse(CamelModel):
    """Public projection of a user (owner, member, collaborator)."""

    id: str
    email: str
    username: str

    @classmethod
    def from_domain(cls, user: UserSummary) -> UserSummaryResponse:
        return cls(id=user.id.value, email=user.email, username=user.username)


class UserResponse(CamelModel):
    """The caller's own account, including role and team."""

    id: str
    email: str
    username: str
    role: Role
    team: TeamResponse | None = None

    @classmethod
    def from_domain(cls, user: User, team: Team | None) -> UserResponse:
        return cls(
            id=user.id.value,
            email=user.email,
            username=user.username,
            role=user.role,
            team=TeamResponse.from_domain(team) if team else None,
        )

    @classmethod
    def from_account(cls, account: Account) -> UserResponse:
        return cls.from_domain(account.user, account.team)


class AuthResponse(CamelModel):
    token: str
    user: UserResponse

    @classmethod
    def from_session(cls, session: AuthSession) -> AuthResponse:
        return cls(token=session.token, user=UserResponse.from_account(session.account))


class NotificationGroupResponse(CamelModel):
    id: str
    name: str


class NotificationSenderResponse(CamelModel):
    username: str


class NotificationResponse(CamelModel):
    """A pending group invitation addressed to the caller."""

    id: str
    type: str = "GROUP_INVITATION"
    group: NotificationGroupResponse
    sender: NotificationSenderResponse
    created_at: str

    @classmethod
    def from_domain(cls, invitation: PendingInvitation) -> NotificationResponse:
        return cls(
            id=invitation.invitation_id.value,
            group=NotificationGroupResponse(
                id=invitation.group_id.value, name=invitation.group_name
            ),
            sender=NotificationSenderResponse(username=invitation.sender_username),
            created_at=invitation.created_at.isoformat(),
        )
