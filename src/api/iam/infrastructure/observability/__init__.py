"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from iam.infrastructure.observability.repository_probe import (
    DefaultGroupRepositoryProbe,
    DefaultInvitationRepositoryProbe,
    DefaultPasswordResetTokenRepositoryProbe,
    DefaultTeamRepositoryProbe,
    DefaultUserRepositoryProbe,
    GroupRepositoryProbe,
    InvitationRepositoryProbe,
    PasswordResetTokenRepositoryProbe,
    TeamRepositoryProbe,
    UserRepositoryProbe,
)

__all__ = [
    "DefaultGroupRepositoryProbe",
    "DefaultInvitationRepositoryProbe",
    "DefaultPasswordResetTokenRepositoryProbe",
    "DefaultTeamRepositoryProbe",
    "DefaultUserRepositoryProbe",
    "GroupRepositoryProbe",
    "InvitationRepositoryProbe",
    "PasswordResetTokenRepositoryProbe",
    "TeamRepositoryProbe",
    "UserRepositoryProbe",
]
