"""Turns IAM domain events into outgoing emails.

Services hand over the events collected from their aggregates after the
transaction commits. Delivery is best effort: a failed email is recorded
through the probe and never fails the operation that triggered it.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import urlencode

from iam.application.observability import DefaultNotifierProbe, NotifierProbe
from iam.domain.events import DomainEvent, InvitationSent, PasswordResetRequested
from shared_kernel.notifications import EmailMessage, EmailSender


class IamNotifier:
    """Renders and sends the emails belonging to IAM domain events."""

    def __init__(
        self,
        email_sender: EmailSender,
        sender_address: str,
        reset_url_base: str,
        app_url: str,
        probe: NotifierProbe | None = None,
    ):
        self._email_sender = email_sender
        self._sender_address = sender_address
        self._reset_url_base = reset_url_base
        self._app_url = app_url.rstrip("/")
        self._probe = probe or DefaultNotifierProbe()

    async def dispatch(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            kind, message = self._render(event)
            try:
                await self._email_sender.send(message)
            except Exception as e:
                self._probe.notification_failed(kind, message.recipient, str(e))
                continue
            self._probe.notification_sent(kind, message.recipient)

    def reset_link(self, token: str) -> str:
        return f"{self._reset_url_base}?{urlencode({'token': token})}"

    def _render(self, event: DomainEvent) -> tuple[str, EmailMessage]:
        if isinstance(event, InvitationSent):
            return "group_invitation", EmailMessage(
                recipient=event.receiver_email,
                subject=f"You're invited to join {event.group_name}",
                body=(
                    f"{event.sender_username} invited you to join "
                    f"{event.group_name}.\n\n"
                    f"Respond from your notifications: {self._app_url}/groups"
                ),
                sender=self._sender_address,
            )
        if isinstance(event, PasswordResetRequested):
            return "password_reset", EmailMessage(
                recipient=event.email,
                subject="Reset your password",
                body=(
                    "Use the link below to choose a new password. It expires at "
                    f"{event.expires_at.isoformat()}.\n\n"
                    f"{self.reset_link(event.token)}"
                ),
                sender=self._sender_address,
            )
        raise TypeError(f"No notification for event {type(event).__name__}")
