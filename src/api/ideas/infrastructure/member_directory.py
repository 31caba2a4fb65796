"""Read-only view of IAM users and groups for the Ideas context."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.infrastructure.group_repository import visible_group_ids
from iam.infrastructure.models import GroupModel, UserModel
from ideas.domain.value_objects import Contributor, GroupRef
from ideas.ports.repositories import IMemberDirectory


def contributor_from_model(model: UserModel) -> Contributor:
    return Contributor(id=model.id, email=model.email, username=model.username)


class MemberDirectory(IMemberDirectory):
    """Queries the IAM tables directly; never writes to them."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_contributor(self, user_id: str) -> Contributor | None:
        result = await self._session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        model = result.scalar_one_or_none()
        return contributor_from_model(model) if model else None

    async def get_team_member(self, user_id: str, team_id: str) -> Contributor | None:
        result = await self._session.execute(
            select(UserModel).where(
                UserModel.id == user_id, UserModel.team_id == team_id
            )
        )
        model = result.scalar_one_or_none()
        return contributor_from_model(model) if model else None

    async def get_group(self, group_id: str) -> GroupRef | None:
        result = await self._session.execute(
            select(GroupModel.id, GroupModel.name).where(GroupModel.id == group_id)
        )
        row = result.one_or_none()
        return GroupRef(id=row.id, name=row.name) if row else None

    async def group_ids_for(self, user_id: str) -> set[str]:
        result = await self._session.execute(visible_group_ids(user_id))
        return set(result.scalars().all())
