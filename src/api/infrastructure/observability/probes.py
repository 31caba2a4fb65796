"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for database connection observability."""

    def pool_initialized(self, host: str, database: str, max_conn: int) -> None:
        """Record that the engine and its connection pool were created."""
        ...

    def connection_failed(self, host: str, database: str, error: Exception) -> None:
        """Record that a database connection attempt failed."""
        ...

    def pool_closed(self) -> None:
        """Record that the connection pool was closed."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe(StructlogProbe):
    """Default implementation of ConnectionProbe using structlog."""

    def pool_initialized(self, host: str, database: str, max_conn: int) -> None:
        self._logger.info(
            "connection_pool_initialized",
            host=host,
            database=database,
            max_connections=max_conn,
            **self._get_context_kwargs(),
        )

    def connection_failed(self, host: str, database: str, error: Exception) -> None:
        self._logger.error(
            "database_connection_failed",
            host=host,
            database=database,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def pool_closed(self) -> None:
        self._logger.info(
            "connection_pool_closed",
            **self._get_context_kwargs(),
        )
