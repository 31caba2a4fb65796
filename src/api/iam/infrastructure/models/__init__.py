"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations.
"""

from iam.infrastructure.models.group import GroupModel, group_members
from iam.infrastructure.models.invitation import GroupInvitationModel
from iam.infrastructure.models.password_reset import PasswordResetTokenModel
from iam.infrastructure.models.team import TeamModel
from iam.infrastructure.models.user import UserModel

__all__ = [
    "GroupInvitationModel",
    "GroupModel",
    "PasswordResetTokenModel",
    "TeamModel",
    "UserModel",
    "group_members",
]
