"""Protocol for authentication observability.

Defines the interface for domain probes that capture authentication events
for the get_current_user dependency.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for bearer authentication of requests."""

    def user_authenticated(self, user_id: str) -> None:
        """Record successful authentication of a request."""
        ...

    def authentication_failed(self, reason: str) -> None:
        """Record that a request could not be authenticated."""
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        ...


class DefaultAuthenticationProbe(StructlogProbe):
    """Default implementation of AuthenticationProbe using structlog."""

    def user_authenticated(self, user_id: str) -> None:
        self._logger.debug(
            "user_authenticated",
            authenticated_user_id=user_id,
            **self._get_context_kwargs(),
        )

    def authentication_failed(self, reason: str) -> None:
        self._logger.warning(
            "authentication_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )
