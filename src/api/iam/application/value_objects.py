"""Application-layer value objects for IAM bounded context.

These represent the authentication context of a request and the read
views returned by IAM services, rather than core business entities.
"""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.aggregates import Team, User
from iam.domain.value_objects import Role, TeamId, UserId


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated caller, as carried by the verified bearer token."""

    user_id: UserId
    team_id: TeamId | None
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class Account:
    """A user together with the team they belong to (if any)."""

    user: User
    team: Team | None


@dataclass(frozen=True)
class AuthSession:
    """Result of a successful signup or login."""

    token: str
    account: Account
