"""HTTP routes for signup, login and account management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import AuthService, GroupService
from iam.application.value_objects import CurrentUser
from iam.dependencies.authentication import get_current_user
from iam.dependencies.group import get_group_service
from iam.dependencies.user import get_auth_service
from iam.domain.value_objects import TeamId
from iam.ports.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    TeamNotFoundError,
    UserNotFoundError,
)
from iam.presentation.auth.models import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    NotificationResponse,
    RequestPasswordResetRequest,
    ResetPasswordRequest,
    SignupRequest,
    UpdateProfileRequest,
    UserResponse,
)
from shared_kernel.api_models import MessageResponse

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)

RESET_REQUESTED_MESSAGE = "If that email is registered, a reset link has been sent"


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Create an account and return a bearer token for it.

    Raises:
        HTTPException: 400 for invalid input or team ID
        HTTPException: 404 if teamId does not exist
        HTTPException: 409 if email or username is taken
    """
    team_id = None
    if request.team_id:
        try:
            team_id = TeamId.from_string(request.team_id)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid team ID format",
            )

    try:
        session = await service.signup(
            email=request.email,
            password=request.password,
            username=request.username,
            team_name=request.team_name,
            team_id=team_id,
        )
        return AuthResponse.from_session(session)

    except DuplicateEmailError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )
    except DuplicateUsernameError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already taken",
        )
    except TeamNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Team not found",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Signup failed",
        )


@router.post("/login")
async def login(
    request: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Exchange email and password for a bearer token."""
    try:
        session = await service.login(email=request.email, password=request.password)
        return AuthResponse.from_session(session)

    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed",
        )


@router.get("/me")
async def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    """Return the caller's account and team."""
    try:
        account = await service.get_account(current_user.user_id)
        return UserResponse.from_account(account)

    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get user",
        )


@router.put("/profile")
async def update_profile(
    request: UpdateProfileRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    """Change the caller's username."""
    try:
        account = await service.update_profile(
            user_id=current_user.user_id, username=request.username
        )
        return UserResponse.from_account(account)

    except DuplicateUsernameError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already taken",
        )
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile",
        )


@router.put("/change-password")
async def change_password(
    request: ChangePasswordRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Change the caller's password; the current password must match."""
    try:
        await service.change_password(
            user_id=current_user.user_id,
            current_password=request.current_password,
            new_password=request.new_password,
        )
        return MessageResponse(message="Password changed successfully")

    except IncorrectPasswordError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to change password",
        )


@router.post("/request-password-reset")
async def request_password_reset(
    request: RequestPasswordResetRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Email a reset link. The response does not reveal whether the email exists."""
    try:
        await service.request_password_reset(email=request.email)
        return MessageResponse(message=RESET_REQUESTED_MESSAGE)

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process password reset request",
        )


@router.post("/reset-password")
async def reset_password(
    request: ResetPasswordRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Set a new password using an emailed single-use token."""
    try:
        await service.reset_password(
            token=request.token, new_password=request.new_password
        )
        return MessageResponse(message="Password has been reset successfully")

    except InvalidResetTokenError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset token",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reset password",
        )


@router.get("/notifications")
async def list_notifications(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> list[NotificationResponse]:
    """Pending group invitations addressed to the caller, newest first."""
    try:
        invitations = await service.list_notifications(current_user.user_id)
        return [NotificationResponse.from_domain(i) for i in invitations]

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch notifications",
        )
