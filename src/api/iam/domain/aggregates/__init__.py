"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from iam.domain.aggregates.group import Group
from iam.domain.aggregates.invitation import GroupInvitation
from iam.domain.aggregates.password_reset import PasswordResetToken, hash_reset_token
from iam.domain.aggregates.team import Team
from iam.domain.aggregates.user import User, username_from_email

__all__ = [
    "Group",
    "GroupInvitation",
    "PasswordResetToken",
    "Team",
    "User",
    "hash_reset_token",
    "username_from_email",
]
