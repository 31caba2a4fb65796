"""Ideas presentation layer."""

from ideas.presentation.routes import router

__all__ = ["router"]
