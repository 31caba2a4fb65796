"""Domain exceptions for IAM bounded context.

These exceptions represent expected failures of IAM operations. Services
raise them; the presentation layer maps them to HTTP status codes
(not found -> 404, conflicts -> 409, credential failures -> 400/401).
Authorization failures use the built-in PermissionError.
"""


class UserNotFoundError(Exception):
    """Raised when a referenced user does not exist."""

    pass


class TeamNotFoundError(Exception):
    """Raised when a referenced team does not exist."""

    pass


class GroupNotFoundError(Exception):
    """Raised when a group does not exist or is not visible to the caller.

    The two cases are deliberately indistinguishable so that group
    existence is not leaked to non-members.
    """

    pass


class InvitationNotFoundError(Exception):
    """Raised when an invitation does not exist or was not sent to the caller."""

    pass


class DuplicateEmailError(Exception):
    """Raised when signing up with an email that is already registered."""

    pass


class DuplicateUsernameError(Exception):
    """Raised when a username is already taken by another account."""

    pass


class AlreadyGroupMemberError(Exception):
    """Raised when inviting a user who already owns or belongs to the group."""

    pass


class InvitationAlreadyPendingError(Exception):
    """Raised when inviting a user who already has a PENDING invitation."""

    pass


class InvitationAlreadyAcceptedError(Exception):
    """Raised when re-inviting a user whose invitation was ACCEPTED."""

    pass


class InvalidCredentialsError(Exception):
    """Raised when an email/password pair does not match an account."""

    pass


class IncorrectPasswordError(ValueError):
    """Raised when the current password given for a change does not match."""

    pass


class InvalidResetTokenError(ValueError):
    """Raised when a password reset token is unknown or expired."""

    pass
