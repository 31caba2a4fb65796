"""Pydantic models for idea API requests and responses."""

from __future__ import annotations

from pydantic import Field

from ideas.domain.aggregates import Idea
from ideas.domain.value_objects import Contributor, GroupRef, StageGate, Visibility
from shared_kernel.api_models import CamelModel


class CreateIdeaRequest(CamelModel):
    """Request model for submitting an idea.

    ``allowedGroupId`` is required when visibility is GROUP and ignored
    otherwise.
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    opportunity: str | None = None
    tags: str | None = Field(default=None, description="Comma-separated tags")
    visibility: Visibility | None = None
    allowed_group_id: str | None = None


class UpdateIdeaRequest(CamelModel):
    """Request model for a partial idea update. Omitted fields are unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    opportunity: str | None = None
    tags: str | None = None
    visibility: Visibility | None = None
    allowed_group_id: str | None = None
    stage_gate: StageGate | None = None


class AddCollaboratorRequest(CamelModel):
    user_id: str = Field(..., min_length=1)


class ContributorResponse(CamelModel):
    id: str
    email: str
    username: str

    @classmethod
    def from_domain(cls, contributor: Contributor) -> ContributorResponse:
        return cls(
            id=contributor.id,
            email=contributor.email,
            username=contributor.username,
        )


class AllowedGroupResponse(CamelModel):
    id: str
    name: str

    @classmethod
    def from_domain(cls, group: GroupRef) -> AllowedGroupResponse:
        return cls(id=group.id, name=group.name)


class IdeaResponse(CamelModel):
    """Response model for idea."""

    id: str = Field(..., description="Idea ID (ULID format)")
    idea_number: int = Field(..., description="Number within the team or personal scope")
    global_counter: int = Field(..., description="Number across all ideas")
    title: str
    description: str
    opportunity: str
    tags: str
    stage_gate: StageGate
    is_sidelined: bool
    visibility: Visibility
    allowed_group: AllowedGroupResponse | None = None
    team_id: str | None = None
    owner: ContributorResponse
    collaborators: list[ContributorResponse] = Field(default_factory=list)
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, idea: Idea) -> IdeaResponse:
        """Convert domain Idea aggregate to API response."""
        return cls(
            id=idea.id.value,
            idea_number=idea.idea_number,
            global_counter=idea.global_counter,
            title=idea.title,
            description=idea.description,
            opportunity=idea.opportunity,
            tags=idea.tags,
            stage_gate=idea.stage_gate,
            is_sidelined=idea.is_sidelined,
            visibility=idea.visibility,
            allowed_group=AllowedGroupResponse.from_domain(idea.allowed_group)
            if idea.allowed_group
            else None,
            team_id=idea.team_id,
            owner=ContributorResponse.from_domain(idea.owner),
            collaborators=[
                ContributorResponse.from_domain(c) for c in idea.collaborators
            ],
            created_at=idea.created_at.isoformat(),
            updated_at=idea.updated_at.isoformat(),
        )
