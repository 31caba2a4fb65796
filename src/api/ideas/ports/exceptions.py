"""Exceptions for the Ideas bounded context.

Services raise these; routes map them to HTTP status codes. Authorization
failures use the built-in PermissionError.
"""


class IdeaNotFoundError(Exception):
    """Raised when an idea does not exist or is out of the caller's scope."""

    pass


class AllowedGroupNotFoundError(Exception):
    """Raised when the group an idea should be shared with does not exist."""

    pass


class CollaboratorNotFoundError(Exception):
    """Raised when a prospective collaborator is not in the caller's team."""

    pass
