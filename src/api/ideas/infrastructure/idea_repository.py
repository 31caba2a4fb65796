"""PostgreSQL implementation of IIdeaRepository.

Listings are filtered in SQL: the visibility predicate and every list
filter are composed from an IdeaListCriteria into one WHERE clause.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import ColumnElement, and_, delete, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.infrastructure.group_repository import visible_group_ids
from iam.infrastructure.models import GroupModel, UserModel
from ideas.domain.aggregates import Idea
from ideas.domain.value_objects import (
    Contributor,
    GroupRef,
    IdeaId,
    IdeaListCriteria,
    StageGate,
    Visibility,
)
from ideas.infrastructure.member_directory import contributor_from_model
from ideas.infrastructure.models import IdeaModel, idea_collaborators
from ideas.infrastructure.observability import (
    DefaultIdeaRepositoryProbe,
    IdeaRepositoryProbe,
)
from ideas.ports.repositories import IIdeaRepository


def visibility_clause(viewer_id: str) -> ColumnElement[bool]:
    """Ideas the viewer owns, collaborates on, or can see publicly or via a group."""
    collaborating = select(idea_collaborators.c.idea_id).where(
        idea_collaborators.c.user_id == viewer_id
    )
    return or_(
        IdeaModel.owner_id == viewer_id,
        IdeaModel.id.in_(collaborating),
        IdeaModel.visibility == Visibility.PUBLIC.value,
        and_(
            IdeaModel.visibility == Visibility.GROUP.value,
            IdeaModel.allowed_group_id.in_(visible_group_ids(viewer_id)),
        ),
    )


def criteria_clauses(criteria: IdeaListCriteria) -> list[ColumnElement[bool]]:
    """Translate list criteria into clauses to be AND-ed together."""
    clauses = [visibility_clause(criteria.viewer_id)]

    if not criteria.include_sidelined:
        clauses.append(IdeaModel.is_sidelined.is_(False))
    if criteria.stage_gate is not None:
        clauses.append(IdeaModel.stage_gate == criteria.stage_gate.value)
    if criteria.search:
        clauses.append(
            or_(
                IdeaModel.title.icontains(criteria.search, autoescape=True),
                IdeaModel.description.icontains(criteria.search, autoescape=True),
            )
        )
    if criteria.tag:
        clauses.append(IdeaModel.tags.contains(criteria.tag, autoescape=True))

    return clauses


class IdeaRepository(IIdeaRepository):
    """PostgreSQL-backed repository for Idea aggregates.

    Ideas are returned with owner, collaborators and allowed group
    resolved from the IAM tables.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: IdeaRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultIdeaRepositoryProbe()

    async def save(self, idea: Idea) -> None:
        """Upsert the idea row and reconcile its collaborator rows."""
        stmt = select(IdeaModel).where(IdeaModel.id == idea.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        allowed_group_id = idea.allowed_group.id if idea.allowed_group else None
        if model:
            model.title = idea.title
            model.description = idea.description
            model.opportunity = idea.opportunity
            model.tags = idea.tags
            model.stage_gate = idea.stage_gate.value
            model.is_sidelined = idea.is_sidelined
            model.visibility = idea.visibility.value
            model.allowed_group_id = allowed_group_id
            model.updated_at = idea.updated_at
        else:
            model = IdeaModel(
                id=idea.id.value,
                idea_number=idea.idea_number,
                global_counter=idea.global_counter,
                numbering_scope=idea.numbering_scope,
                title=idea.title,
                description=idea.description,
                opportunity=idea.opportunity,
                tags=idea.tags,
                stage_gate=idea.stage_gate.value,
                is_sidelined=idea.is_sidelined,
                visibility=idea.visibility.value,
                allowed_group_id=allowed_group_id,
                owner_id=idea.owner.id,
                team_id=idea.team_id,
                created_at=idea.created_at,
                updated_at=idea.updated_at,
            )
            self._session.add(model)
        await self._session.flush()

        current = await self._session.execute(
            select(idea_collaborators.c.user_id).where(
                idea_collaborators.c.idea_id == idea.id.value
            )
        )
        stored = set(current.scalars().all())
        wanted = {c.id for c in idea.collaborators}

        to_add = wanted - stored
        to_remove = stored - wanted
        if to_add:
            await self._session.execute(
                insert(idea_collaborators),
                [{"idea_id": idea.id.value, "user_id": uid} for uid in to_add],
            )
        if to_remove:
            await self._session.execute(
                delete(idea_collaborators).where(
                    idea_collaborators.c.idea_id == idea.id.value,
                    idea_collaborators.c.user_id.in_(to_remove),
                )
            )

        self._probe.idea_saved(idea.id.value, len(wanted))

    async def get_by_id(self, idea_id: IdeaId) -> Idea | None:
        stmt = select(IdeaModel).where(IdeaModel.id == idea_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.idea_not_found(idea_id.value)
            return None

        ideas = await self._hydrate([model])
        return ideas[0]

    async def list_visible(self, criteria: IdeaListCriteria) -> list[Idea]:
        stmt = (
            select(IdeaModel)
            .where(*criteria_clauses(criteria))
            .order_by(IdeaModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        ideas = await self._hydrate(result.scalars().all())
        self._probe.ideas_listed(criteria.viewer_id, len(ideas))
        return ideas

    async def delete(self, idea: Idea) -> bool:
        """Delete an idea; collaborator rows go with it via ON DELETE CASCADE."""
        stmt = select(IdeaModel).where(IdeaModel.id == idea.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.idea_not_found(idea.id.value)
            return False

        await self._session.delete(model)
        await self._session.flush()
        self._probe.idea_deleted(idea.id.value)
        return True

    async def _hydrate(self, models: Sequence[IdeaModel]) -> list[Idea]:
        if not models:
            return []

        idea_ids = [m.id for m in models]
        owner_ids = {m.owner_id for m in models}
        group_ids = {m.allowed_group_id for m in models if m.allowed_group_id}

        owners_result = await self._session.execute(
            select(UserModel).where(UserModel.id.in_(owner_ids))
        )
        owners = {u.id: contributor_from_model(u) for u in owners_result.scalars().all()}

        collaborators: dict[str, list[Contributor]] = {i: [] for i in idea_ids}
        collab_result = await self._session.execute(
            select(idea_collaborators.c.idea_id, UserModel)
            .join(UserModel, UserModel.id == idea_collaborators.c.user_id)
            .where(idea_collaborators.c.idea_id.in_(idea_ids))
            .order_by(UserModel.username)
        )
        for idea_id, user in collab_result.all():
            collaborators[idea_id].append(contributor_from_model(user))

        groups: dict[str, GroupRef] = {}
        if group_ids:
            groups_result = await self._session.execute(
                select(GroupModel.id, GroupModel.name).where(
                    GroupModel.id.in_(group_ids)
                )
            )
            groups = {row.id: GroupRef(id=row.id, name=row.name) for row in groups_result}

        return [
            Idea(
                id=IdeaId(value=m.id),
                idea_number=m.idea_number,
                global_counter=m.global_counter,
                numbering_scope=m.numbering_scope,
                title=m.title,
                description=m.description,
                owner=owners[m.owner_id],
                team_id=m.team_id,
                opportunity=m.opportunity,
                tags=m.tags,
                stage_gate=StageGate(m.stage_gate),
                is_sidelined=m.is_sidelined,
                visibility=Visibility(m.visibility),
                allowed_group=groups.get(m.allowed_group_id)
                if m.allowed_group_id
                else None,
                collaborators=collaborators[m.id],
                created_at=m.created_at,
                updated_at=m.updated_at,
            )
            for m in models
        ]
