"""Application services for IAM bounded context.

Application services orchestrate domain aggregates, repositories, and
other infrastructure to fulfill use cases. They are the "front door" to
the IAM context.
"""

from iam.application.services.auth_service import AuthService
from iam.application.services.group_service import GroupService
from iam.application.services.team_service import TeamService

__all__ = [
    "AuthService",
    "GroupService",
    "TeamService",
]
