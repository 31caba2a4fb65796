"""Domain-Oriented Observability for the Ideas application layer."""

from ideas.application.observability.idea_service_probe import (
    DefaultIdeaServiceProbe,
    IdeaServiceProbe,
)

__all__ = ["DefaultIdeaServiceProbe", "IdeaServiceProbe"]
