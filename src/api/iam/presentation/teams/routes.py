"""HTTP routes for reading the caller's team."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import TeamService
from iam.application.value_objects import CurrentUser
from iam.dependencies.authentication import get_current_user
from iam.dependencies.team import get_team_service
from iam.domain.value_objects import TeamId
from iam.ports.exceptions import TeamNotFoundError
from iam.presentation.teams.models import TeamDetailResponse, TeamMemberResponse

router = APIRouter(
    prefix="/teams",
    tags=["teams"],
)


def _parse_team_id(team_id: str) -> TeamId:
    try:
        return TeamId.from_string(team_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid team ID format",
        )


@router.get("/{team_id}")
async def get_team(
    team_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[TeamService, Depends(get_team_service)],
) -> TeamDetailResponse:
    """Get the caller's team with its members."""
    team_id_obj = _parse_team_id(team_id)

    try:
        team, members = await service.get_team(team_id_obj, actor=current_user)
        return TeamDetailResponse.from_domain(team, members)

    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except TeamNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Team not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get team",
        )


@router.get("/{team_id}/members")
async def list_team_members(
    team_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[TeamService, Depends(get_team_service)],
) -> list[TeamMemberResponse]:
    """List members of the caller's team, ordered by username."""
    team_id_obj = _parse_team_id(team_id)

    try:
        members = await service.list_members(team_id_obj, actor=current_user)
        return [TeamMemberResponse.from_domain(m) for m in members]

    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except TeamNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Team not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list team members",
        )
