"""Pydantic models for team API responses."""

from __future__ import annotations

from iam.domain.aggregates import Team, User
from iam.domain.value_objects import Role
from shared_kernel.api_models import CamelModel


class TeamMemberResponse(CamelModel):
    id: str
    email: str
    username: str
    role: Role

    @classmethod
    def from_domain(cls, user: User) -> TeamMemberResponse:
        return cls(
            id=user.id.value,
            email=user.email,
            username=user.username,
            role=user.role,
        )


class TeamDetailResponse(CamelModel):
    id: str
    name: str
    members: list[TeamMemberResponse]

    @classmethod
    def from_domain(cls, team: Team, members: list[User]) -> TeamDetailResponse:
        return cls(
            id=team.id.value,
            name=team.name,
            members=[TeamMemberResponse.from_domain(m) for m in members],
        )
