"""Protocol for notification dispatch observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class NotifierProbe(Protocol):
    """Domain probe for emails triggered by IAM domain events."""

    def notification_sent(self, kind: str, recipient: str) -> None:
        ...

    def notification_failed(self, kind: str, recipient: str, error: str) -> None:
        """Record a delivery failure; the triggering operation still succeeds."""
        ...

    def with_context(self, context: ObservationContext) -> NotifierProbe:
        ...


class DefaultNotifierProbe(StructlogProbe):
    """Default implementation of NotifierProbe using structlog."""

    def notification_sent(self, kind: str, recipient: str) -> None:
        self._logger.info(
            "notification_sent",
            kind=kind,
            recipient=recipient,
            **self._get_context_kwargs(),
        )

    def notification_failed(self, kind: str, recipient: str, error: str) -> None:
        self._logger.error(
            "notification_failed",
            kind=kind,
            recipient=recipient,
            error=error,
            **self._get_context_kwargs(),
        )
