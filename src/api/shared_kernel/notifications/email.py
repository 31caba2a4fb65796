"""Email delivery port and the development implementation.

No mail provider is wired in: ``LoggingEmailSender`` renders each message
into the structured log, which is what local development and the test
suite rely on. A provider-backed sender only has to satisfy ``EmailSender``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shared_kernel.notifications.observability import EmailProbe


@dataclass(frozen=True)
class EmailMessage:
    """A rendered plain-text email."""

    recipient: str
    subject: str
    body: str
    sender: str


@runtime_checkable
class EmailSender(Protocol):
    """Delivers rendered email messages."""

    async def send(self, message: EmailMessage) -> None:
        """Deliver the message.

        Raises:
            Exception: Any delivery failure. Callers treat email as best
                effort and only record the failure.
        """
        ...


class LoggingEmailSender:
    """EmailSender that writes messages to the log instead of delivering them."""

    def __init__(self, probe: EmailProbe):
        self._probe = probe

    async def send(self, message: EmailMessage) -> None:
        self._probe.email_rendered(
            recipient=message.recipient,
            subject=message.subject,
            body=message.body,
            sender=message.sender,
        )
