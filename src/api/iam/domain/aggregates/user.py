"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from iam.domain.value_objects import Role, TeamId, UserId, UserSummary

USERNAME_MAX_LENGTH = 50


def username_from_email(email: str) -> str:
    """Default username for a new account: the local part of its email."""
    return email.split("@", 1)[0]


@dataclass
class User:
    """User aggregate representing an account holder.

    Users are created at signup and never hard-deleted. Email is fixed for
    the lifetime of the account; username and password can change.
    """

    id: UserId
    email: str
    username: str
    password_hash: str
    role: Role = Role.MEMBER
    team_id: TeamId | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def register(
        cls,
        email: str,
        password_hash: str,
        username: str | None = None,
        team_id: TeamId | None = None,
        role: Role = Role.MEMBER,
    ) -> User:
        """Create a new account.

        The username defaults to the local part of the email address.

        Raises:
            ValueError: If the email or resulting username is empty
        """
        email = email.strip().lower()
        if "@" not in email:
            raise ValueError("A valid email address is required")
        resolved = (username or "").strip() or username_from_email(email)
        _validate_username(resolved)
        return cls(
            id=UserId.generate(),
            email=email,
            username=resolved,
            password_hash=password_hash,
            role=role,
            team_id=team_id,
        )

    def rename(self, username: str) -> None:
        """Change the username.

        Raises:
            ValueError: If the username is empty or too long
        """
        username = username.strip()
        _validate_username(username)
        self.username = username

    def change_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def summary(self) -> UserSummary:
        """Projection embedded in groups, ideas and team listings."""
        return UserSummary(id=self.id, email=self.email, username=self.username)

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def _validate_username(username: str) -> None:
    if not username:
        raise ValueError("Username cannot be empty")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValueError(
            f"Username cannot exceed {USERNAME_MAX_LENGTH} characters"
        )
