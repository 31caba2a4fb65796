"""Bearer token issuing and verification.

Tokens are HS256-signed JWTs carrying the user id (``sub``), the user's team
(``team_id``, may be null) and role. Verification is the only thing the rest
of the system needs: ``verify(token)`` returns claims or raises
``InvalidTokenError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import TokenServiceProbe


@dataclass(frozen=True)
class TokenClaims:
    """Verified bearer token claims."""

    user_id: str
    team_id: str | None
    role: str


class InvalidTokenError(Exception):
    """Raised when a bearer token is malformed, tampered with or expired."""

    pass


class TokenService:
    """Issues and verifies signed bearer tokens."""

    def __init__(
        self,
        secret: str,
        probe: TokenServiceProbe,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=7),
    ):
        if not secret:
            raise ValueError("Token signing secret cannot be empty")
        self._secret = secret
        self._probe = probe
        self._algorithm = algorithm
        self._ttl = ttl

    def issue(self, user_id: str, team_id: str | None, role: str) -> str:
        """Create a signed token for the given identity."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "team_id": team_id,
            "role": role,
            "iat": now,
            "exp": now + self._ttl,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        self._probe.token_issued(user_id=user_id)
        return token

    def verify(self, token: str) -> TokenClaims:
        """Validate a token and return its claims.

        Raises:
            InvalidTokenError: If the token cannot be decoded, its signature
                does not match, it has expired, or it lacks a subject.
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as e:
            self._probe.token_validation_failed(reason="Token expired")
            raise InvalidTokenError("Token has expired") from e
        except JWTError as e:
            self._probe.token_validation_failed(reason=str(e))
            raise InvalidTokenError(f"Invalid token: {e}") from e

        user_id = claims.get("sub")
        if not user_id:
            self._probe.token_validation_failed(reason="Missing sub claim")
            raise InvalidTokenError("Missing required claim: sub")

        team_id = claims.get("team_id")
        return TokenClaims(
            user_id=str(user_id),
            team_id=str(team_id) if team_id else None,
            role=str(claims.get("role") or "MEMBER"),
        )
