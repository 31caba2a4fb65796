"""SQLAlchemy ORM models for the Ideas bounded context."""

from ideas.infrastructure.models.idea import (
    IdeaCounterModel,
    IdeaModel,
    idea_collaborators,
)

__all__ = ["IdeaCounterModel", "IdeaModel", "idea_collaborators"]
