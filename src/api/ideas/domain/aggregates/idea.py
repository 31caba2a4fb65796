"""Idea aggregate for the Ideas context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from ideas.domain.value_objects import (
    Contributor,
    GroupRef,
    IdeaId,
    StageGate,
    Visibility,
)

TITLE_MAX_LENGTH = 255


@dataclass
class Idea:
    """Idea aggregate: a proposal moving through the stage-gate lifecycle.

    Business rules:
    - Numbers are allocated once at creation and never change
    - GROUP visibility requires an allowed group; any other visibility
      has none
    - Only the sideline toggle keeps is_sidelined and stage_gate in step;
      a general update may set stage_gate alone
    - Collaborators are unique; adding or removing is idempotent
    """

    id: IdeaId
    idea_number: int
    global_counter: int
    numbering_scope: str
    title: str
    description: str
    owner: Contributor
    team_id: str | None = None
    opportunity: str = ""
    tags: str = ""
    stage_gate: StageGate = StageGate.IDEA
    is_sidelined: bool = False
    visibility: Visibility = Visibility.PRIVATE
    allowed_group: GroupRef | None = None
    collaborators: list[Contributor] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        title: str,
        description: str,
        owner: Contributor,
        team_id: str | None,
        numbering_scope: str,
        idea_number: int,
        global_counter: int,
        opportunity: str | None = None,
        tags: str | None = None,
        visibility: Visibility | None = None,
        allowed_group: GroupRef | None = None,
    ) -> Idea:
        """Factory method for creating a new idea at the IDEA stage.

        Args:
            title: Short name of the idea
            description: What the idea is
            owner: The submitting user
            team_id: Owner's team at creation, if any
            numbering_scope: Scope idea_number was allocated from
            idea_number: Number within the scope
            global_counter: Number across all ideas
            opportunity: Optional opportunity statement
            tags: Optional comma-separated tags
            visibility: Defaults to PRIVATE
            allowed_group: Required when visibility is GROUP

        Raises:
            ValueError: If title or description is blank, or GROUP
                visibility lacks an allowed group
        """
        _validate_title(title)
        _validate_description(description)
        visibility = visibility or Visibility.PRIVATE

        return cls(
            id=IdeaId.generate(),
            idea_number=idea_number,
            global_counter=global_counter,
            numbering_scope=numbering_scope,
            title=title,
            description=description,
            owner=owner,
            team_id=team_id,
            opportunity=opportunity or "",
            tags=tags or "",
            visibility=visibility,
            allowed_group=_resolve_group(visibility, allowed_group, current=None),
        )

    def apply_update(
        self,
        title: str | None = None,
        description: str | None = None,
        opportunity: str | None = None,
        tags: str | None = None,
        visibility: Visibility | None = None,
        allowed_group: GroupRef | None = None,
        stage_gate: StageGate | None = None,
    ) -> None:
        """Change only the supplied fields.

        Switching visibility away from GROUP clears the allowed group.
        Switching to GROUP needs an allowed group in the same call unless
        the idea already has one. While the idea is GROUP-visible, passing
        only an allowed group moves it to that group.

        Raises:
            ValueError: If a supplied field is invalid
        """
        if title is not None:
            _validate_title(title)
        if description is not None:
            _validate_description(description)

        if visibility is not None:
            self.allowed_group = _resolve_group(
                visibility, allowed_group, current=self.allowed_group
            )
            self.visibility = visibility
        elif allowed_group is not None and self.visibility == Visibility.GROUP:
            self.allowed_group = allowed_group

        if title is not None:
            self.title = title
        if description is not None:
            self.description = description
        if opportunity is not None:
            self.opportunity = opportunity
        if tags is not None:
            self.tags = tags
        if stage_gate is not None:
            self.stage_gate = stage_gate
        self._touch()

    def toggle_sideline(self) -> None:
        """Flip the sidelined flag.

        Turning it on moves the idea to SIDELINED; turning it off returns
        it to IDEA regardless of the stage it held before.
        """
        self.is_sidelined = not self.is_sidelined
        self.stage_gate = StageGate.SIDELINED if self.is_sidelined else StageGate.IDEA
        self._touch()

    def add_collaborator(self, contributor: Contributor) -> None:
        if self.is_collaborator(contributor.id):
            return
        self.collaborators.append(contributor)
        self._touch()

    def remove_collaborator(self, user_id: str) -> None:
        before = len(self.collaborators)
        self.collaborators = [c for c in self.collaborators if c.id != user_id]
        if len(self.collaborators) != before:
            self._touch()

    def is_owner(self, user_id: str) -> bool:
        return self.owner.id == user_id

    def is_collaborator(self, user_id: str) -> bool:
        return any(c.id == user_id for c in self.collaborators)

    def _touch(self) -> None:
        self.updated_at = datetime.now(UTC)


def _resolve_group(
    visibility: Visibility,
    requested: GroupRef | None,
    current: GroupRef | None,
) -> GroupRef | None:
    if visibility != Visibility.GROUP:
        return None
    group = requested or current
    if group is None:
        raise ValueError("allowedGroupId is required for GROUP visibility")
    return group


def _validate_title(title: str) -> None:
    if not title or not title.strip():
        raise ValueError("Idea title cannot be empty")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValueError(f"Idea title cannot exceed {TITLE_MAX_LENGTH} characters")


def _validate_description(description: str) -> None:
    if not description or not description.strip():
        raise ValueError("Idea description cannot be empty")
