"""Value objects for the Ideas domain.

Users, teams and groups belong to the IAM context. Ideas refer to them by
their string identifiers and carry read-only summaries for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from shared_kernel.identifiers import UlidIdentifier

GLOBAL_SCOPE = "global"


@dataclass(frozen=True)
class IdeaId(UlidIdentifier):
    """Identifier for an Idea aggregate."""


class StageGate(StrEnum):
    """Lifecycle stage of an idea."""

    IDEA = "IDEA"
    IN_DEVELOPMENT = "IN_DEVELOPMENT"
    LAUNCHED = "LAUNCHED"
    SIDELINED = "SIDELINED"


class Visibility(StrEnum):
    """Who besides the owner and collaborators can see an idea.

    PRIVATE: nobody else
    PUBLIC: every authenticated user
    GROUP: the owner and members of the allowed group
    """

    PRIVATE = "PRIVATE"
    PUBLIC = "PUBLIC"
    GROUP = "GROUP"


@dataclass(frozen=True)
class Actor:
    """The user acting on ideas, as established by authentication."""

    user_id: str
    team_id: str | None = None
    is_admin: bool = False

    @property
    def numbering_scope(self) -> str:
        """Scope from which this actor's new ideas draw their numbers."""
        return numbering_scope_for(self.user_id, self.team_id)


@dataclass(frozen=True)
class Contributor:
    """Display summary of an idea owner or collaborator."""

    id: str
    email: str
    username: str


@dataclass(frozen=True)
class GroupRef:
    """Display summary of the group an idea is shared with."""

    id: str
    name: str


@dataclass(frozen=True)
class IdeaListCriteria:
    """Typed filter for listing ideas visible to a viewer.

    All supplied filters are intersected with the visibility predicate.
    ``search`` matches title or description case-insensitively; ``tag`` is
    a substring match on the raw comma-separated tag string.
    """

    viewer_id: str
    stage_gate: StageGate | None = None
    search: str | None = None
    tag: str | None = None
    include_sidelined: bool = False


def numbering_scope_for(user_id: str, team_id: str | None) -> str:
    """Team id when the user has a team, otherwise a personal scope."""
    if team_id:
        return team_id
    return f"personal-{user_id}"
