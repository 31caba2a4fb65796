"""Aggregates for the Ideas domain."""

from ideas.domain.aggregates.idea import Idea

__all__ = ["Idea"]
