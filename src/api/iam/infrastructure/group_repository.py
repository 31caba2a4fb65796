"""PostgreSQL implementation of IGroupRepository.

Group metadata lives in the groups table and membership in the
group_members association table. Aggregates are always returned fully
hydrated (owner and member summaries included).
"""

from __future__ import annotations

from sqlalchemy import delete, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Group
from iam.domain.value_objects import GroupId, UserId, UserSummary
from iam.infrastructure.models import GroupModel, UserModel, group_members
from iam.infrastructure.observability import (
    DefaultGroupRepositoryProbe,
    GroupRepositoryProbe,
)
from iam.ports.repositories import IGroupRepository


def _summary(model: UserModel) -> UserSummary:
    return UserSummary(
        id=UserId(value=model.id), email=model.email, username=model.username
    )


def visible_group_ids(user_id: str):
    """Select ids of groups the user owns or is a member of."""
    member_of = select(group_members.c.group_id).where(
        group_members.c.user_id == user_id
    )
    return select(GroupModel.id).where(
        or_(GroupModel.owner_id == user_id, GroupModel.id.in_(member_of))
    )


class GroupRepository(IGroupRepository):
    """PostgreSQL-backed repository for Group aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: GroupRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultGroupRepositoryProbe()

    async def save(self, group: Group) -> None:
        """Upsert group metadata and reconcile the member rows."""
        stmt = select(GroupModel).where(GroupModel.id == group.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.name = group.name
            model.description = group.description
            model.updated_at = group.updated_at
        else:
            model = GroupModel(
                id=group.id.value,
                name=group.name,
                description=group.description,
                owner_id=group.owner.id.value,
                created_at=group.created_at,
                updated_at=group.updated_at,
            )
            self._session.add(model)
        await self._session.flush()

        current = await self._session.execute(
            select(group_members.c.user_id).where(
                group_members.c.group_id == group.id.value
            )
        )
        stored = set(current.scalars().all())
        wanted = {m.id.value for m in group.members}

        to_add = wanted - stored
        to_remove = stored - wanted
        if to_add:
            await self._session.execute(
                insert(group_members),
                [{"group_id": group.id.value, "user_id": uid} for uid in to_add],
            )
        if to_remove:
            await self._session.execute(
                delete(group_members).where(
                    group_members.c.group_id == group.id.value,
                    group_members.c.user_id.in_(to_remove),
                )
            )

        self._probe.group_saved(group.id.value, len(wanted))

    async def get_by_id(self, group_id: GroupId) -> Group | None:
        stmt = select(GroupModel).where(GroupModel.id == group_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.group_not_found(group_id.value)
            return None

        group = await self._hydrate(model)
        self._probe.group_retrieved(group_id.value, len(group.members))
        return group

    async def list_for_user(self, user_id: UserId) -> list[Group]:
        stmt = (
            select(GroupModel)
            .where(GroupModel.id.in_(visible_group_ids(user_id.value)))
            .order_by(GroupModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [await self._hydrate(model) for model in result.scalars().all()]

    async def list_ids_for_user(self, user_id: UserId) -> list[GroupId]:
        result = await self._session.execute(visible_group_ids(user_id.value))
        return [GroupId(value=gid) for gid in result.scalars().all()]

    async def delete(self, group: Group) -> bool:
        """Delete a group.

        Member rows and invitations are removed by ON DELETE CASCADE; ideas
        shared with the group lose their allowed group via ON DELETE SET NULL.
        """
        stmt = select(GroupModel).where(GroupModel.id == group.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.group_not_found(group.id.value)
            return False

        await self._session.delete(model)
        await self._session.flush()
        self._probe.group_deleted(group.id.value)
        return True

    async def _hydrate(self, model: GroupModel) -> Group:
        owner_result = await self._session.execute(
            select(UserModel).where(UserModel.id == model.owner_id)
        )
        owner = owner_result.scalar_one()

        members_result = await self._session.execute(
            select(UserModel)
            .join(group_members, group_members.c.user_id == UserModel.id)
            .where(group_members.c.group_id == model.id)
            .order_by(UserModel.username)
        )

        return Group(
            id=GroupId(value=model.id),
            name=model.name,
            description=model.description,
            owner=_summary(owner),
            members=[_summary(m) for m in members_result.scalars().all()],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
