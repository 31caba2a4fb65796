"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories without specifying
implementation details. This allows for dependency inversion and makes
the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    AlreadyGroupMemberError,
    DuplicateEmailError,
    DuplicateUsernameError,
    GroupNotFoundError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvitationAlreadyAcceptedError,
    InvitationAlreadyPendingError,
    InvitationNotFoundError,
    TeamNotFoundError,
    UserNotFoundError,
)
from iam.ports.repositories import (
    IGroupRepository,
    IInvitationRepository,
    IPasswordResetTokenRepository,
    ITeamRepository,
    IUserRepository,
)

__all__ = [
    "AlreadyGroupMemberError",
    "DuplicateEmailError",
    "DuplicateUsernameError",
    "GroupNotFoundError",
    "IGroupRepository",
    "IInvitationRepository",
    "IPasswordResetTokenRepository",
    "ITeamRepository",
    "IUserRepository",
    "IncorrectPasswordError",
    "InvalidCredentialsError",
    "InvalidResetTokenError",
    "InvitationAlreadyAcceptedError",
    "InvitationAlreadyPendingError",
    "InvitationNotFoundError",
    "TeamNotFoundError",
    "UserNotFoundError",
]
