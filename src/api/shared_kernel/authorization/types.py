"""Authorization vocabulary shared across bounded contexts.

Actions name what an actor wants to do with a resource. Each bounded
context decides, in one policy function, which actors may perform them.
"""

from enum import StrEnum


class Action(StrEnum):
    """Operations subject to authorization on a shared resource."""

    VIEW = "view"
    EDIT = "edit"
    SIDELINE = "sideline"
    DELETE = "delete"
    ADD_COLLABORATOR = "add_collaborator"
    REMOVE_COLLABORATOR = "remove_collaborator"
    MANAGE = "manage"
    INVITE = "invite"
