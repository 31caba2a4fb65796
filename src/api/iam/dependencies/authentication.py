"""Bearer token authentication dependencies.

Every protected route depends on ``get_current_user``, which verifies the
``Authorization: Bearer <token>`` header and yields the caller's identity.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.value_objects import CurrentUser
from iam.domain.value_objects import Role, TeamId, UserId
from infrastructure.settings import get_auth_settings
from shared_kernel.auth import DefaultTokenServiceProbe, InvalidTokenError, TokenService
from shared_kernel.observability_context import ObservationContext

bearer_scheme = HTTPBearer(auto_error=False)

_WWW_AUTHENTICATE = {"WWW-Authenticate": "Bearer"}


@lru_cache
def get_token_service() -> TokenService:
    """Get the cached token service configured from auth settings."""
    settings = get_auth_settings()
    return TokenService(
        secret=settings.jwt_secret.get_secret_value(),
        probe=DefaultTokenServiceProbe(),
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(days=settings.token_ttl_days),
    )


def get_authentication_probe() -> AuthenticationProbe:
    return DefaultAuthenticationProbe()


async def get_current_user(
    token_service: Annotated[TokenService, Depends(get_token_service)],
    auth_probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> CurrentUser:
    """Resolve the authenticated caller from the bearer token.

    Raises:
        HTTPException 401: If the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        auth_probe.authentication_failed(reason="Missing authorization")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=_WWW_AUTHENTICATE,
        )

    try:
        claims = token_service.verify(credentials.credentials)
        current_user = CurrentUser(
            user_id=UserId.from_string(claims.user_id),
            team_id=TeamId.from_string(claims.team_id) if claims.team_id else None,
            role=Role(claims.role),
        )
    except (InvalidTokenError, ValueError) as e:
        auth_probe.authentication_failed(reason=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers=_WWW_AUTHENTICATE,
        ) from e

    auth_probe.user_authenticated(user_id=current_user.user_id.value)
    return current_user


def get_observation_context(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ObservationContext:
    """Observation context carrying the caller's identity into probe output."""
    return ObservationContext(
        user_id=current_user.user_id.value,
        team_id=current_user.team_id.value if current_user.team_id else None,
    )
