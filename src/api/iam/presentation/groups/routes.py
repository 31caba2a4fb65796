"""HTTP routes for group management and invitations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import GroupService
from iam.application.value_objects import CurrentUser
from iam.dependencies.authentication import get_current_user
from iam.dependencies.group import get_group_service
from iam.domain.value_objects import GroupId, InvitationId, UserId
from iam.ports.exceptions import (
    AlreadyGroupMemberError,
    GroupNotFoundError,
    InvitationAlreadyAcceptedError,
    InvitationAlreadyPendingError,
    InvitationNotFoundError,
    UserNotFoundError,
)
from iam.presentation.groups.models import (
    AddGroupMemberRequest,
    CreateGroupRequest,
    GroupResponse,
    InvitationResponse,
    InviteToGroupRequest,
    RespondToInvitationRequest,
    UpdateGroupRequest,
)
from shared_kernel.api_models import MessageResponse

router = APIRouter(
    prefix="/groups",
    tags=["groups"],
)


def _parse_group_id(group_id: str) -> GroupId:
    try:
        return GroupId.from_string(group_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid group ID format",
        )


def _parse_user_id(user_id: str) -> UserId:
    try:
        return UserId.from_string(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid user ID format",
        )


def _group_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Group not found",
    )


@router.get(
    "",
    response_model=list[GroupResponse],
    summary="List groups",
    description="List groups the caller owns or belongs to, newest first",
    responses={
        200: {"description": "Groups listed successfully"},
        401: {"description": "Authentication required"},
        500: {"description": "Internal server error"},
    },
)
async def list_groups(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> list[GroupResponse]:
    """List groups visible to the caller."""
    try:
        groups = await service.list_groups(actor_id=current_user.user_id)
        return [GroupResponse.from_domain(group) for group in groups]

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list groups",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_group(
    request: CreateGroupRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Create a new group owned by the caller.

    Args:
        request: Group name and optional description
        current_user: Authenticated user
        service: Group service for orchestration

    Returns:
        GroupResponse with created group details

    Raises:
        HTTPException: 400 if the name is invalid
        HTTPException: 403 if the caller has no account
        HTTPException: 500 for unexpected errors
    """
    try:
        group = await service.create_group(
            name=request.name,
            actor_id=current_user.user_id,
            description=request.description,
        )
        return GroupResponse.from_domain(group)

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
            detail="Failed to create group",
        )


@router.get(
    "/{group_id}",
    summary="Get group",
    responses={
        200: {"description": "Group found"},
        400: {"description": "Invalid group ID format"},
        404: {"description": "Group not found"},
    },
)
async def get_group(
    group_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Get a group the caller owns or belongs to."""
    group_id_obj = _parse_group_id(group_id)

    try:
        group = await service.get_group(group_id_obj, actor_id=current_user.user_id)
        return GroupResponse.from_domain(group)

    except GroupNotFoundError:
        raise _group_not_found()
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get group",
        )


@router.put("/{group_id}")
async def update_group(
    group_id: str,
    request: UpdateGroupRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Update group name or description (owner only).

    Raises:
        HTTPException: 400 if group ID or name is invalid
        HTTPException: 403 if the caller is a member but not the owner
        HTTPException: 404 if the group is not visible to the caller
    """
    group_id_obj = _parse_group_id(group_id)

    try:
        group = await service.update_group(
            group_id_obj,
            actor_id=current_user.user_id,
            name=request.name,
            description=request.description,
        )
        return GroupResponse.from_domain(group)

    except GroupNotFoundError:
        raise _group_not_found()
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
            detail="Failed to update group",
        )


@router.delete("/{group_id}")
async def delete_group(
    group_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> MessageResponse:
    """Delete a group (owner only). Members and invitations go with it."""
    group_id_obj = _parse_group_id(group_id)

    try:
        await service.delete_group(group_id_obj, actor_id=current_user.user_id)
        return MessageResponse(message="Group deleted successfully")

    except GroupNotFoundError:
        raise _group_not_found()
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete group",
        )


@router.post("/{group_id}/members")
async def add_member(
    group_id: str,
    request: AddGroupMemberRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Add a user directly to the group (owner only, idempotent)."""
    group_id_obj = _parse_group_id(group_id)
    user_id_obj = _parse_user_id(request.user_id)

    try:
        group = await service.add_member(
            group_id_obj, actor_id=current_user.user_id, user_id=user_id_obj
        )
        return GroupResponse.from_domain(group)

    except GroupNotFoundError:
        raise _group_not_found()
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add member",
        )


@router.delete("/{group_id}/members/{user_id}")
async def remove_member(
    group_id: str,
    user_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Remove a member from the group (owner only, idempotent)."""
    group_id_obj = _parse_group_id(group_id)
    user_id_obj = _parse_user_id(user_id)

    try:
        group = await service.remove_member(
            group_id_obj, actor_id=current_user.user_id, user_id=user_id_obj
        )
        return GroupResponse.from_domain(group)

    except GroupNotFoundError:
        raise _group_not_found()
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove member",
        )


@router.post(
    "/{group_id}/invite",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Invitation sent"},
        403: {"description": "Only the owner can invite"},
        404: {"description": "Group or user not found"},
        409: {"description": "Already a member, pending or accepted"},
    },
)
async def invite_to_group(
    group_id: str,
    request: InviteToGroupRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> InvitationResponse:
    """Invite a user by username. A declined invitation is re-issued."""
    group_id_obj = _parse_group_id(group_id)

    try:
        invitation = await service.invite(
            group_id_obj, actor_id=current_user.user_id, username=request.username
        )
        return InvitationResponse.from_domain(invitation)

    except GroupNotFoundError:
        raise _group_not_found()
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except (
        AlreadyGroupMemberError,
        InvitationAlreadyPendingError,
        InvitationAlreadyAcceptedError,
    ) as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
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
            detail="Failed to send invitation",
        )


@router.post("/invitations/{invitation_id}/respond")
async def respond_to_invitation(
    invitation_id: str,
    request: RespondToInvitationRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> InvitationResponse:
    """Accept or decline an invitation addressed to the caller.

    Raises:
        HTTPException: 400 if the invitation was already answered
        HTTPException: 404 if the invitation is not addressed to the caller
    """
    try:
        invitation_id_obj = InvitationId.from_string(invitation_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid invitation ID format",
        )

    try:
        invitation = await service.respond(
            invitation_id_obj, actor_id=current_user.user_id, accept=request.accept
        )
        return InvitationResponse.from_domain(invitation)

    except InvitationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invitation not found",
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
            detail="Failed to respond to invitation",
        )
