"""Outgoing notifications (email) shared by bounded contexts."""

from shared_kernel.notifications.email import (
    EmailMessage,
    EmailSender,
    LoggingEmailSender,
)
from shared_kernel.notifications.observability import (
    DefaultEmailProbe,
    EmailProbe,
)

__all__ = [
    "DefaultEmailProbe",
    "EmailMessage",
    "EmailProbe",
    "EmailSender",
    "LoggingEmailSender",
]
