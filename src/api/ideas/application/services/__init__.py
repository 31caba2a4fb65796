"""Application services for the Ideas bounded context."""

from ideas.application.services.idea_service import IdeaService

__all__ = ["IdeaService"]
