"""Domain probe for bearer token operations.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TokenServiceProbe(Protocol):
    """Domain probe for token issuing and verification."""

    def token_issued(self, user_id: str) -> None:
        """Record that a token was issued."""
        ...

    def token_validation_failed(self, reason: str) -> None:
        """Record that token verification failed."""
        ...

    def with_context(self, context: ObservationContext) -> TokenServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTokenServiceProbe(StructlogProbe):
    """Default implementation of TokenServiceProbe using structlog."""

    def token_issued(self, user_id: str) -> None:
        self._logger.debug(
            "auth_token_issued",
            subject=user_id,
            **self._get_context_kwargs(),
        )

    def token_validation_failed(self, reason: str) -> None:
        self._logger.warning(
            "auth_token_validation_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )
