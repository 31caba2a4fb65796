"""Email notification dependencies for IAM services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from iam.application.notifier import IamNotifier
from infrastructure.settings import get_email_settings
from shared_kernel.notifications import (
    DefaultEmailProbe,
    EmailSender,
    LoggingEmailSender,
)


@lru_cache
def get_email_sender() -> EmailSender:
    """Get the process-wide email sender."""
    return LoggingEmailSender(probe=DefaultEmailProbe())


def get_iam_notifier(
    email_sender: Annotated[EmailSender, Depends(get_email_sender)],
) -> IamNotifier:
    settings = get_email_settings()
    return IamNotifier(
        email_sender=email_sender,
        sender_address=settings.sender,
        reset_url_base=settings.reset_url_base,
        app_url=settings.app_url,
    )
