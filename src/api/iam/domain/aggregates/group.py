"""Group aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from iam.domain.value_objects import GroupId, UserId, UserSummary


@dataclass
class Group:
    """Group aggregate: a named set of users that ideas can be shared with.

    Business rules:
    - The owner is fixed at creation and is not implicitly a member
    - Members are unique; adding or removing is idempotent
    - Name is 1-255 characters
    """

    id: GroupId
    name: str
    owner: UserSummary
    description: str = ""
    members: list[UserSummary] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls, name: str, owner: UserSummary, description: str | None = None
    ) -> Group:
        """Factory method for creating a new group.

        Args:
            name: The name of the group
            owner: The creating user, who becomes the owner
            description: Optional free-text description

        Raises:
            ValueError: If name is invalid
        """
        _validate_name(name)
        return cls(
            id=GroupId.generate(),
            name=name.strip(),
            owner=owner,
            description=description or "",
        )

    def update_details(
        self, name: str | None = None, description: str | None = None
    ) -> None:
        """Apply a partial update of the group's name and description."""
        if name is not None:
            _validate_name(name)
            self.name = name.strip()
        if description is not None:
            self.description = description
        self.updated_at = datetime.now(UTC)

    def add_member(self, user: UserSummary) -> None:
        """Add a member. Adding an existing member is a no-op."""
        if not self.has_member(user.id):
            self.members.append(user)

    def remove_member(self, user_id: UserId) -> None:
        """Remove a member. Removing a non-member is a no-op."""
        self.members = [m for m in self.members if m.id != user_id]

    def is_owner(self, user_id: UserId) -> bool:
        return self.owner.id == user_id

    def has_member(self, user_id: UserId) -> bool:
        return any(m.id == user_id for m in self.members)

    def is_visible_to(self, user_id: UserId) -> bool:
        """Owners and members can see a group; everyone else gets not-found."""
        return self.is_owner(user_id) or self.has_member(user_id)


def _validate_name(name: str) -> None:
    if not name or not name.strip() or len(name.strip()) > 255:
        raise ValueError("Group name must be between 1 and 255 characters")
