"""Ports (interfaces) for the Ideas bounded context."""

from ideas.ports.exceptions import (
    AllowedGroupNotFoundError,
    CollaboratorNotFoundError,
    IdeaNotFoundError,
)
from ideas.ports.repositories import (
    ICounterRepository,
    IIdeaRepository,
    IMemberDirectory,
)

__all__ = [
    "AllowedGroupNotFoundError",
    "CollaboratorNotFoundError",
    "ICounterRepository",
    "IIdeaRepository",
    "IMemberDirectory",
    "IdeaNotFoundError",
]
