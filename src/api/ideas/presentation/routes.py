"""HTTP routes for the idea lifecycle."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ideas.application.services import IdeaService
from ideas.dependencies.idea import get_current_actor, get_idea_service
from ideas.domain.value_objects import Actor, IdeaId, IdeaListCriteria, StageGate
from ideas.ports.exceptions import (
    AllowedGroupNotFoundError,
    CollaboratorNotFoundError,
    IdeaNotFoundError,
)
from ideas.presentation.models import (
    AddCollaboratorRequest,
    CreateIdeaRequest,
    IdeaResponse,
    UpdateIdeaRequest,
)
from shared_kernel.api_models import MessageResponse

router = APIRouter(
    prefix="/ideas",
    tags=["ideas"],
)


def _parse_idea_id(idea_id: str) -> IdeaId:
    try:
        return IdeaId.from_string(idea_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid idea ID format",
        )


def _idea_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Idea not found",
    )


@router.get(
    "",
    response_model=list[IdeaResponse],
    summary="List ideas",
    description=(
        "List ideas the caller owns, collaborates on, or can see because they "
        "are public or shared with one of the caller's groups. Newest first."
    ),
    responses={
        200: {"description": "Ideas listed successfully"},
        400: {"description": "Invalid filter value"},
        401: {"description": "Authentication required"},
    },
)
async def list_ideas(
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[IdeaService, Depends(get_idea_service)],
    stage_gate: Annotated[StageGate | None, Query(alias="stageGate")] = None,
    search: Annotated[str | None, Query()] = None,
    include_sidelined: Annotated[bool, Query(alias="includeSidelined")] = False,
    tag: Annotated[str | None, Query()] = None,
) -> list[IdeaResponse]:
    """List ideas visible to the caller, filtered."""
    criteria = IdeaListCriteria(
        viewer_id=actor.user_id,
        stage_gate=stage_gate,
        search=search or None,
        tag=tag or None,
        include_sidelined=include_sidelined,
    )

    try:
        ideas = await service.list_ideas(criteria)
        return [IdeaResponse.from_domain(idea) for idea in ideas]

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch ideas",
        )


@router.get("/{idea_id}")
async def get_idea(
    idea_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[IdeaService, Depends(get_idea_service)],
) -> IdeaResponse:
    """Get an idea visible to the caller or belonging to the caller's team."""
    idea_id_obj = _parse_idea_id(idea_id)

    try:
        idea = await service.get_idea(idea_id_obj, actor)
        return IdeaResponse.from_domain(idea)

    except IdeaNotFoundError:
        raise _idea_not_found()
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch idea",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_idea(
    request: CreateIdeaRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[IdeaService, Depends(get_idea_service)],
) -> IdeaResponse:
    """Submit a new idea.

    Raises:
        HTTPException: 400 if fields are invalid or GROUP lacks allowedGroupId
        HTTPException: 404 if the allowed group does not exist
    """
    try:
        idea = await service.create_idea(
            actor,
            title=request.title,
            description=request.description,
            opportunity=request.opportunity,
            tags=request.tags,
            visibility=request.visibility,
            allowed_group_id=request.allowed_group_id,
        )
        return IdeaResponse.from_domain(idea)

    except AllowedGroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create idea",
        )


@router.put("/{idea_id}")
async def update_idea(
    idea_id: str,
    request: UpdateIdeaRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[IdeaService, Depends(get_idea_service)],
) -> IdeaResponse:
    """Update the supplied fields (owner, collaborator or admin)."""
    idea_id_obj = _parse_idea_id(idea_id)

    try:
        idea = await service.update_idea(
            idea_id_obj,
            actor,
            title=request.title,
            description=request.description,
            opportunity=request.opportunity,
            tags=request.tags,
            visibility=request.visibility,
            allowed_group_id=request.allowed_group_id,
            stage_gate=request.stage_gate,
        )
        return IdeaResponse.from_domain(idea)

    except IdeaNotFoundError:
        raise _idea_not_found()
    except AllowedGroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update idea",
        )


@router.patch("/{idea_id}/sideline")
async def toggle_sideline(
    idea_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[IdeaService, Depends(get_idea_service)],
) -> IdeaResponse:
    """Sideline an idea, or restore a sidelined one to IDEA (owner or admin)."""
    idea_id_obj = _parse_idea_id(idea_id)

    try:
        idea = await service.toggle_sideline(idea_id_obj, actor)
        return IdeaResponse.from_domain(idea)

    except IdeaNotFoundError:
        raise _idea_not_found()
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sideline idea",
        )


@router.delete("/{idea_id}")
async def delete_idea(
    idea_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[IdeaService, Depends(get_idea_service)],
) -> MessageResponse:
    """Permanently delete an idea (owner or admin)."""
    idea_id_obj = _parse_idea_id(idea_id)

    try:
        await service.delete_idea(idea_id_obj, actor)
        return MessageResponse(message="Idea deleted successfully")

    except IdeaNotFoundError:
        raise _idea_not_found()
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete idea",
        )


@router.post("/{idea_id}/collaborators")
async def add_collaborator(
    idea_id: str,
    request: AddCollaboratorRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[IdeaService, Depends(get_idea_service)],
) -> IdeaResponse:
    """Add a member of the caller's team as collaborator."""
    idea_id_obj = _parse_idea_id(idea_id)

    try:
        idea = await service.add_collaborator(
            idea_id_obj, actor, user_id=request.user_id
        )
        return IdeaResponse.from_domain(idea)

    except IdeaNotFoundError:
        raise _idea_not_found()
    except CollaboratorNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add collaborator",
        )


@router.delete("/{idea_id}/collaborators/{user_id}")
async def remove_collaborator(
    idea_id: str,
    user_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[IdeaService, Depends(get_idea_service)],
) -> IdeaResponse:
    """Remove a collaborator (owner only)."""
    idea_id_obj = _parse_idea_id(idea_id)

    try:
        idea = await service.remove_collaborator(idea_id_obj, actor, user_id=user_id)
        return IdeaResponse.from_domain(idea)

    except IdeaNotFoundError:
        raise _idea_not_found()
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove collaborator",
        )
