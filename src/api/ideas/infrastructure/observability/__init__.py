"""Observability probes for Ideas infrastructure."""

from ideas.infrastructure.observability.repository_probe import (
    CounterRepositoryProbe,
    DefaultCounterRepositoryProbe,
    DefaultIdeaRepositoryProbe,
    IdeaRepositoryProbe,
)

__all__ = [
    "CounterRepositoryProbe",
    "DefaultCounterRepositoryProbe",
    "DefaultIdeaRepositoryProbe",
    "IdeaRepositoryProbe",
]
