"""PostgreSQL implementation of IPasswordResetTokenRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import PasswordResetToken
from iam.domain.value_objects import PasswordResetTokenId, UserId
from iam.infrastructure.models import PasswordResetTokenModel
from iam.infrastructure.observability import (
    DefaultPasswordResetTokenRepositoryProbe,
    PasswordResetTokenRepositoryProbe,
)
from iam.ports.repositories import IPasswordResetTokenRepository


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PostgreSQL-backed store of hashed password reset tokens."""

    def __init__(
        self,
        session: AsyncSession,
        probe: PasswordResetTokenRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultPasswordResetTokenRepositoryProbe()

    async def save(self, token: PasswordResetToken) -> None:
        self._session.add(
            PasswordResetTokenModel(
                id=token.id.value,
                user_id=token.user_id.value,
                token_hash=token.token_hash,
                expires_at=token.expires_at,
            )
        )
        await self._session.flush()
        self._probe.reset_token_saved(token.user_id.value)

    async def get_by_hash(self, token_hash: str) -> PasswordResetToken | None:
        stmt = select(PasswordResetTokenModel).where(
            PasswordResetTokenModel.token_hash == token_hash
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None

        return PasswordResetToken(
            id=PasswordResetTokenId(value=model.id),
            user_id=UserId(value=model.user_id),
            token_hash=model.token_hash,
            expires_at=model.expires_at,
        )

    async def delete(self, token: PasswordResetToken) -> None:
        await self._session.execute(
            delete(PasswordResetTokenModel).where(
                PasswordResetTokenModel.id == token.id.value
            )
        )

    async def delete_for_user(self, user_id: UserId) -> int:
        result = await self._session.execute(
            delete(PasswordResetTokenModel).where(
                PasswordResetTokenModel.user_id == user_id.value
            )
        )
        count = result.rowcount or 0
        self._probe.reset_tokens_deleted(user_id.value, count)
        return count
