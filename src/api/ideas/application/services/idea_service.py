"""Idea application service.

Every operation on an existing idea first checks that the idea is in the
actor's scope (not-found otherwise, admins included) and only then asks
the policy whether the actor may perform the action.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ideas.application.observability import DefaultIdeaServiceProbe, IdeaServiceProbe
from ideas.domain.aggregates import Idea
from ideas.domain.policy import is_permitted
from ideas.domain.value_objects import (
    GLOBAL_SCOPE,
    Actor,
    GroupRef,
    IdeaId,
    IdeaListCriteria,
    StageGate,
    Visibility,
)
from ideas.domain.visibility import is_in_scope
from ideas.ports.exceptions import (
    AllowedGroupNotFoundError,
    CollaboratorNotFoundError,
    IdeaNotFoundError,
)
from ideas.ports.repositories import (
    ICounterRepository,
    IIdeaRepository,
    IMemberDirectory,
)
from shared_kernel.authorization import Action

_DENIED_MESSAGES = {
    Action.EDIT: "Not authorized to edit this idea",
    Action.SIDELINE: "Only owner or admin can sideline ideas",
    Action.DELETE: "Only owner or admin can delete ideas",
    Action.ADD_COLLABORATOR: "Not authorized to add collaborators",
    Action.REMOVE_COLLABORATOR: "Only owner can remove collaborators",
}


class IdeaService:
    """Application service for the idea lifecycle.

    Manages database transactions. Idea creation allocates both numbers
    and inserts the idea in one transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        idea_repository: IIdeaRepository,
        counter_repository: ICounterRepository,
        directory: IMemberDirectory,
        probe: IdeaServiceProbe | None = None,
    ):
        """Initialize IdeaService with dependencies.

        Args:
            session: Database session for transaction management
            idea_repository: Repository for idea persistence
            counter_repository: Allocates idea numbers
            directory: Read access to users and groups
            probe: Optional domain probe for observability
        """
        self._session = session
        self._idea_repository = idea_repository
        self._counter_repository = counter_repository
        self._directory = directory
        self._probe = probe or DefaultIdeaServiceProbe()

    async def list_ideas(self, criteria: IdeaListCriteria) -> list[Idea]:
        """Ideas visible to the viewer that match the criteria, newest first."""
        async with self._session.begin():
            return await self._idea_repository.list_visible(criteria)

    async def get_idea(self, idea_id: IdeaId, actor: Actor) -> Idea:
        """Get an idea in the actor's scope.

        Raises:
            IdeaNotFoundError: If the idea does not exist or is out of scope
        """
        async with self._session.begin():
            return await self._load_in_scope(idea_id, actor)

    async def create_idea(
        self,
        actor: Actor,
        title: str,
        description: str,
        opportunity: str | None = None,
        tags: str | None = None,
        visibility: Visibility | None = None,
        allowed_group_id: str | None = None,
    ) -> Idea:
        """Create an idea owned by the actor, numbered in the actor's scope.

        Raises:
            ValueError: If a field is invalid or GROUP visibility lacks a group
            AllowedGroupNotFoundError: If the allowed group does not exist
        """
        async with self._session.begin():
            allowed_group = None
            if visibility == Visibility.GROUP and allowed_group_id:
                allowed_group = await self._require_group(allowed_group_id)

            owner = await self._directory.get_contributor(actor.user_id)
            if owner is None:
                raise PermissionError("Unknown user")

            scope = actor.numbering_scope
            idea_number = await self._counter_repository.next_value(scope)
            global_counter = await self._counter_repository.next_value(GLOBAL_SCOPE)

            idea = Idea.create(
                title=title,
                description=description,
                owner=owner,
                team_id=actor.team_id,
                numbering_scope=scope,
                idea_number=idea_number,
                global_counter=global_counter,
                opportunity=opportunity,
                tags=tags,
                visibility=visibility,
                allowed_group=allowed_group,
            )
            await self._idea_repository.save(idea)

        self._probe.idea_created(idea.id.value, scope, idea_number, global_counter)
        return idea

    async def update_idea(
        self,
        idea_id: IdeaId,
        actor: Actor,
        title: str | None = None,
        description: str | None = None,
        opportunity: str | None = None,
        tags: str | None = None,
        visibility: Visibility | None = None,
        allowed_group_id: str | None = None,
        stage_gate: StageGate | None = None,
    ) -> Idea:
        """Change the supplied fields (owner, collaborator or admin).

        Raises:
            IdeaNotFoundError: If the idea is out of scope
            PermissionError: If the actor may not edit the idea
            AllowedGroupNotFoundError: If the allowed group does not exist
            ValueError: If a field is invalid
        """
        async with self._session.begin():
            idea = await self._load_in_scope(idea_id, actor)
            self._authorize(actor, idea, Action.EDIT)

            allowed_group = None
            target_visibility = visibility or idea.visibility
            if allowed_group_id and target_visibility == Visibility.GROUP:
                allowed_group = await self._require_group(allowed_group_id)

            idea.apply_update(
                title=title,
                description=description,
                opportunity=opportunity,
                tags=tags,
                visibility=visibility,
                allowed_group=allowed_group,
                stage_gate=stage_gate,
            )
            await self._idea_repository.save(idea)

        self._probe.idea_updated(idea_id.value)
        return idea

    async def toggle_sideline(self, idea_id: IdeaId, actor: Actor) -> Idea:
        """Sideline or restore an idea (owner or admin)."""
        async with self._session.begin():
            idea = await self._load_in_scope(idea_id, actor)
            self._authorize(actor, idea, Action.SIDELINE)
            idea.toggle_sideline()
            await self._idea_repository.save(idea)

        self._probe.idea_sideline_toggled(idea_id.value, idea.is_sidelined)
        return idea

    async def delete_idea(self, idea_id: IdeaId, actor: Actor) -> None:
        """Permanently delete an idea (owner or admin)."""
        async with self._session.begin():
            idea = await self._load_in_scope(idea_id, actor)
            self._authorize(actor, idea, Action.DELETE)
            await self._idea_repository.delete(idea)

        self._probe.idea_deleted(idea_id.value)

    async def add_collaborator(
        self, idea_id: IdeaId, actor: Actor, user_id: str
    ) -> Idea:
        """Add a member of the actor's team as collaborator (idempotent).

        Raises:
            IdeaNotFoundError: If the idea is out of scope
            PermissionError: If the actor is neither owner nor collaborator
            CollaboratorNotFoundError: If the user is not in the actor's team
        """
        async with self._session.begin():
            idea = await self._load_in_scope(idea_id, actor)
            self._authorize(actor, idea, Action.ADD_COLLABORATOR)

            collaborator = None
            if actor.team_id is not None:
                collaborator = await self._directory.get_team_member(
                    user_id, actor.team_id
                )
            if collaborator is None:
                raise CollaboratorNotFoundError("User not found in team")

            idea.add_collaborator(collaborator)
            await self._idea_repository.save(idea)

        self._probe.collaborator_added(idea_id.value, user_id)
        return idea

    async def remove_collaborator(
        self, idea_id: IdeaId, actor: Actor, user_id: str
    ) -> Idea:
        """Remove a collaborator (owner only, idempotent)."""
        async with self._session.begin():
            idea = await self._load_in_scope(idea_id, actor)
            self._authorize(actor, idea, Action.REMOVE_COLLABORATOR)
            idea.remove_collaborator(user_id)
            await self._idea_repository.save(idea)

        self._probe.collaborator_removed(idea_id.value, user_id)
        return idea

    async def _load_in_scope(self, idea_id: IdeaId, actor: Actor) -> Idea:
        idea = await self._idea_repository.get_by_id(idea_id)
        if idea is None:
            raise IdeaNotFoundError(f"Idea {idea_id} not found")

        group_ids = await self._directory.group_ids_for(actor.user_id)
        if not is_in_scope(idea, actor, group_ids):
            raise IdeaNotFoundError(f"Idea {idea_id} not found")
        return idea

    def _authorize(self, actor: Actor, idea: Idea, action: Action) -> None:
        if not is_permitted(actor, idea, action):
            self._probe.permission_denied(idea.id.value, actor.user_id, action)
            raise PermissionError(_DENIED_MESSAGES[action])

    async def _require_group(self, group_id: str) -> GroupRef:
        group = await self._directory.get_group(group_id)
        if group is None:
            raise AllowedGroupNotFoundError(f"Group {group_id} not found")
        return group
