"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for
instrumentation, following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        user_id: Identifier of the user performing the operation.
        team_id: Team of the acting user, when the user belongs to one.
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(user_id="01H...", team_id="01H...")
        probe = DefaultIdeaServiceProbe().with_context(context)
    """

    request_id: str | None = None
    user_id: str | None = None
    team_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        if self.team_id is not None:
            result["team_id"] = self.team_id
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
