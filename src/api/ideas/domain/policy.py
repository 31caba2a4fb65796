"""Authorization policy for idea operations.

One table decides which actors may perform which action on an idea that
is already in scope for them.
"""

from __future__ import annotations

from ideas.domain.aggregates import Idea
from ideas.domain.value_objects import Actor
from shared_kernel.authorization import Action


def is_permitted(actor: Actor, idea: Idea, action: Action) -> bool:
    """Decide whether the actor may perform the action on the idea.

    | Action              | Allowed actor                   |
    |---------------------|---------------------------------|
    | VIEW                | anyone the idea is in scope for |
    | EDIT                | owner, collaborator or admin    |
    | SIDELINE, DELETE    | owner or admin                  |
    | ADD_COLLABORATOR    | owner or collaborator           |
    | REMOVE_COLLABORATOR | owner                           |

    Raises:
        ValueError: For actions that do not apply to ideas
    """
    is_owner = idea.is_owner(actor.user_id)
    is_collaborator = idea.is_collaborator(actor.user_id)

    match action:
        case Action.VIEW:
            return True
        case Action.EDIT:
            return is_owner or is_collaborator or actor.is_admin
        case Action.SIDELINE | Action.DELETE:
            return is_owner or actor.is_admin
        case Action.ADD_COLLABORATOR:
            return is_owner or is_collaborator
        case Action.REMOVE_COLLABORATOR:
            return is_owner
        case _:
            raise ValueError(f"Action {action} does not apply to ideas")
