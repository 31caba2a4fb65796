"""Domain events for IAM bounded context.

Domain events capture facts about things that have happened in the domain.
Application services collect them after the transaction commits and hand
them to the notifier, which turns them into emails.
"""

from iam.domain.events.account import PasswordResetRequested
from iam.domain.events.invitation import InvitationSent

# Type alias for all domain events in the IAM context
DomainEvent = InvitationSent | PasswordResetRequested

__all__ = [
    "DomainEvent",
    "InvitationSent",
    "PasswordResetRequested",
]
