"""Password reset token aggregate for IAM context."""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from iam.domain.events import PasswordResetRequested
from iam.domain.value_objects import PasswordResetTokenId, UserId


def hash_reset_token(token: str) -> str:
    """SHA-256 digest under which reset tokens are stored and looked up."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


@dataclass
class PasswordResetToken:
    """Single-use credential allowing a password change without login.

    Only the hash of the token is persisted. The plaintext is carried on
    the PasswordResetRequested event so it can be emailed, then discarded.
    """

    id: PasswordResetTokenId
    user_id: UserId
    token_hash: str
    expires_at: datetime
    _pending_events: list[PasswordResetRequested] = field(
        default_factory=list, repr=False
    )

    @classmethod
    def issue(
        cls, user_id: UserId, email: str, ttl: timedelta = timedelta(hours=1)
    ) -> PasswordResetToken:
        """Create a token for the user, valid for ``ttl``."""
        plaintext = secrets.token_hex(32)
        now = datetime.now(UTC)
        reset = cls(
            id=PasswordResetTokenId.generate(),
            user_id=user_id,
            token_hash=hash_reset_token(plaintext),
            expires_at=now + ttl,
        )
        reset._pending_events.append(
            PasswordResetRequested(
                user_id=user_id.value,
                email=email,
                token=plaintext,
                expires_at=reset.expires_at,
                occurred_at=now,
            )
        )
        return reset

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at

    def collect_events(self) -> list[PasswordResetRequested]:
        """Return and clear pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
