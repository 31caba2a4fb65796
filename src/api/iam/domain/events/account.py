"""Account domain events for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PasswordResetRequested:
    """Event raised when a password reset token is issued.

    Attributes:
        user_id: The ULID of the account
        email: Address the reset link is delivered to
        token: Plaintext token; only ever delivered by email, never stored
        expires_at: When the token stops being accepted
        occurred_at: When the event occurred (UTC)
    """

    user_id: str
    email: str
    token: str = field(repr=False)
    expires_at: datetime
    occurred_at: datetime
