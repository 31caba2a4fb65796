"""Domain probe for outgoing email."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class EmailProbe(Protocol):
    """Domain probe for outgoing email."""

    def email_rendered(
        self, recipient: str, subject: str, body: str, sender: str
    ) -> None:
        """Record a message handled by the logging sender."""
        ...

    def with_context(self, context: ObservationContext) -> EmailProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEmailProbe(StructlogProbe):
    """Default implementation of EmailProbe using structlog."""

    def email_rendered(
        self, recipient: str, subject: str, body: str, sender: str
    ) -> None:
        self._logger.info(
            "email_rendered",
            recipient=recipient,
            subject=subject,
            body=body,
            sender=sender,
            **self._get_context_kwargs(),
        )
