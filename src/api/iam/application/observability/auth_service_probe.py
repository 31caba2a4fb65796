"""Protocol for account service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shared_kernel.observability_probe import StructlogProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthServiceProbe(Protocol):
    """Domain probe for signup, login and credential operations."""

    def user_signed_up(
        self, user_id: str, role: str, team_id: str | None, created_team: bool
    ) -> None:
        ...

    def signup_rejected(self, email: str, reason: str) -> None:
        ...

    def login_succeeded(self, user_id: str) -> None:
        ...

    def login_failed(self, email: str, reason: str) -> None:
        ...

    def profile_updated(self, user_id: str, username: str) -> None:
        ...

    def password_changed(self, user_id: str) -> None:
        ...

    def password_reset_requested(self, email: str, account_found: bool) -> None:
        ...

    def password_reset_completed(self, user_id: str) -> None:
        ...

    def password_reset_rejected(self, reason: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> AuthServiceProbe:
        ...


class DefaultAuthServiceProbe(StructlogProbe):
    """Default implementation of AuthServiceProbe using structlog."""

    def user_signed_up(
        self, user_id: str, role: str, team_id: str | None, created_team: bool
    ) -> None:
        self._logger.info(
            "user_signed_up",
            new_user_id=user_id,
            role=role,
            new_user_team_id=team_id,
            created_team=created_team,
            **self._get_context_kwargs(),
        )

    def signup_rejected(self, email: str, reason: str) -> None:
        self._logger.info(
            "signup_rejected",
            email=email,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def login_succeeded(self, user_id: str) -> None:
        self._logger.info(
            "login_succeeded",
            account_id=user_id,
            **self._get_context_kwargs(),
        )

    def login_failed(self, email: str, reason: str) -> None:
        self._logger.warning(
            "login_failed",
            email=email,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def profile_updated(self, user_id: str, username: str) -> None:
        self._logger.info(
            "profile_updated",
            account_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def password_changed(self, user_id: str) -> None:
        self._logger.info(
            "password_changed",
            account_id=user_id,
            **self._get_context_kwargs(),
        )

    def password_reset_requested(self, email: str, account_found: bool) -> None:
        self._logger.info(
            "password_reset_requested",
            email=email,
            account_found=account_found,
            **self._get_context_kwargs(),
        )

    def password_reset_completed(self, user_id: str) -> None:
        self._logger.info(
            "password_reset_completed",
            account_id=user_id,
            **self._get_context_kwargs(),
        )

    def password_reset_rejected(self, reason: str) -> None:
        self._logger.warning(
            "password_reset_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )
