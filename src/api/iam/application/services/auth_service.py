"""Account application service for IAM bounded context.

Covers signup (with optional team provisioning), login, profile and
password management, including the emailed password reset flow.
"""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.notifier import IamNotifier
from iam.application.observability import AuthServiceProbe, DefaultAuthServiceProbe
from iam.application.security import hash_password, verify_password
from iam.application.value_objects import Account, AuthSession
from iam.domain.aggregates import (
    PasswordResetToken,
    Team,
    User,
    hash_reset_token,
    username_from_email,
)
from iam.domain.value_objects import Role, TeamId, UserId
from iam.ports.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    TeamNotFoundError,
    UserNotFoundError,
)
from iam.ports.repositories import (
    IPasswordResetTokenRepository,
    ITeamRepository,
    IUserRepository,
)
from shared_kernel.auth import TokenService


class AuthService:
    """Application service for accounts and credentials.

    Manages database transactions: every use case runs its reads and
    writes in a single ``session.begin()`` block. Emails are sent only
    after the transaction has committed.
    """

    def __init__(
        self,
        session: AsyncSession,
        user_repository: IUserRepository,
        team_repository: ITeamRepository,
        reset_token_repository: IPasswordResetTokenRepository,
        token_service: TokenService,
        notifier: IamNotifier,
        reset_token_ttl: timedelta = timedelta(hours=1),
        probe: AuthServiceProbe | None = None,
    ):
        self._session = session
        self._user_repository = user_repository
        self._team_repository = team_repository
        self._reset_token_repository = reset_token_repository
        self._token_service = token_service
        self._notifier = notifier
        self._reset_token_ttl = reset_token_ttl
        self._probe = probe or DefaultAuthServiceProbe()

    async def signup(
        self,
        email: str,
        password: str,
        username: str | None = None,
        team_name: str | None = None,
        team_id: TeamId | None = None,
    ) -> AuthSession:
        """Register a new account and sign it in.

        Team handling:
        - team_id given: join that team as MEMBER
        - only team_name given: create the team, become its ADMIN
        - neither: MEMBER without a team

        Raises:
            DuplicateEmailError: If the email is already registered
            DuplicateUsernameError: If the username is already taken
            TeamNotFoundError: If team_id does not exist
            ValueError: If email, username or team name are invalid
        """
        normalized_email = email.strip().lower()
        resolved_username = (username or "").strip() or username_from_email(
            normalized_email
        )
        created_team = False

        async with self._session.begin():
            if await self._user_repository.get_by_email(normalized_email):
                self._probe.signup_rejected(normalized_email, "email_taken")
                raise DuplicateEmailError("Email already registered")
            if await self._user_repository.get_by_username(resolved_username):
                self._probe.signup_rejected(normalized_email, "username_taken")
                raise DuplicateUsernameError("Username already taken")

            team: Team | None = None
            role = Role.MEMBER
            if team_id is not None:
                team = await self._team_repository.get_by_id(team_id)
                if team is None:
                    raise TeamNotFoundError(f"Team {team_id} not found")
            elif team_name and team_name.strip():
                team = Team.create(team_name)
                await self._team_repository.save(team)
                role = Role.ADMIN
                created_team = True

            user = User.register(
                email=normalized_email,
                password_hash=hash_password(password),
                username=resolved_username,
                team_id=team.id if team else None,
                role=role,
            )
            await self._user_repository.save(user)

        self._probe.user_signed_up(
            user_id=user.id.value,
            role=user.role.value,
            team_id=user.team_id.value if user.team_id else None,
            created_team=created_team,
        )
        return AuthSession(token=self._issue_token(user), account=Account(user, team))

    async def login(self, email: str, password: str) -> AuthSession:
        """Authenticate with email and password.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password
                does not match. The two cases are not distinguished.
        """
        async with self._session.begin():
            user = await self._user_repository.get_by_email(email)
            if user is None:
                self._probe.login_failed(email, "unknown_email")
                raise InvalidCredentialsError("Invalid credentials")
            if not verify_password(password, user.password_hash):
                self._probe.login_failed(email, "wrong_password")
                raise InvalidCredentialsError("Invalid credentials")
            team = await self._load_team(user)

        self._probe.login_succeeded(user.id.value)
        return AuthSession(token=self._issue_token(user), account=Account(user, team))

    async def get_account(self, user_id: UserId) -> Account:
        """Load the caller's account and team.

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        async with self._session.begin():
            user = await self._require_user(user_id)
            team = await self._load_team(user)
        return Account(user, team)

    async def update_profile(self, user_id: UserId, username: str) -> Account:
        """Change the caller's username.

        Raises:
            DuplicateUsernameError: If another account uses the username
            ValueError: If the username is invalid
        """
        async with self._session.begin():
            user = await self._require_user(user_id)
            existing = await self._user_repository.get_by_username(username.strip())
            if existing is not None and existing.id != user.id:
                raise DuplicateUsernameError("Username already taken")
            user.rename(username)
            await self._user_repository.save(user)
            team = await self._load_team(user)

        self._probe.profile_updated(user.id.value, user.username)
        return Account(user, team)

    async def change_password(
        self, user_id: UserId, current_password: str, new_password: str
    ) -> None:
        """Change the caller's password after re-checking the current one.

        Raises:
            IncorrectPasswordError: If current_password does not match
        """
        async with self._session.begin():
            user = await self._require_user(user_id)
            if not verify_password(current_password, user.password_hash):
                raise IncorrectPasswordError("Current password is incorrect")
            user.change_password_hash(hash_password(new_password))
            await self._user_repository.save(user)

        self._probe.password_changed(user.id.value)

    async def request_password_reset(self, email: str) -> None:
        """Email a single-use reset link if the account exists.

        Outstanding tokens of the account are invalidated. Unknown emails
        are accepted silently so that registration status does not leak.
        """
        reset: PasswordResetToken | None = None
        async with self._session.begin():
            user = await self._user_repository.get_by_email(email)
            if user is not None:
                await self._reset_token_repository.delete_for_user(user.id)
                reset = PasswordResetToken.issue(
                    user_id=user.id, email=user.email, ttl=self._reset_token_ttl
                )
                await self._reset_token_repository.save(reset)

        self._probe.password_reset_requested(email, account_found=reset is not None)
        if reset is not None:
            await self._notifier.dispatch(reset.collect_events())

    async def reset_password(self, token: str, new_password: str) -> None:
        """Set a new password using an emailed reset token.

        The token is consumed on success. Expired tokens are deleted when
        presented.

        Raises:
            InvalidResetTokenError: If the token is unknown or expired
        """
        expired = False
        async with self._session.begin():
            reset = await self._reset_token_repository.get_by_hash(
                hash_reset_token(token)
            )
            if reset is None:
                self._probe.password_reset_rejected("unknown_token")
                raise InvalidResetTokenError("Invalid or expired reset token")

            if reset.is_expired():
                await self._reset_token_repository.delete(reset)
                expired = True
            else:
                user = await self._require_user(reset.user_id)
                user.change_password_hash(hash_password(new_password))
                await self._user_repository.save(user)
                await self._reset_token_repository.delete(reset)

        if expired:
            self._probe.password_reset_rejected("expired_token")
            raise InvalidResetTokenError("Invalid or expired reset token")

        self._probe.password_reset_completed(reset.user_id.value)

    def _issue_token(self, user: User) -> str:
        return self._token_service.issue(
            user_id=user.id.value,
            team_id=user.team_id.value if user.team_id else None,
            role=user.role.value,
        )

    async def _require_user(self, user_id: UserId) -> User:
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    async def _load_team(self, user: User) -> Team | None:
        if user.team_id is None:
            return None
        return await self._team_repository.get_by_id(user.team_id)
