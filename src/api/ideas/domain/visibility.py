"""Visibility predicate for ideas.

An idea is visible to a viewer when the viewer owns it, collaborates on
it, it is PUBLIC, or it is shared with a group the viewer owns or belongs
to. The idea repository builds the equivalent SQL clause for listings.
"""

from __future__ import annotations

from collections.abc import Collection

from ideas.domain.aggregates import Idea
from ideas.domain.value_objects import Actor, Visibility


def is_visible_to(idea: Idea, viewer_id: str, viewer_group_ids: Collection[str]) -> bool:
    """Whether the viewer may see the idea, ignoring list filters.

    Args:
        idea: The idea to check
        viewer_id: User id of the viewer
        viewer_group_ids: Ids of groups the viewer owns or is a member of
    """
    if idea.is_owner(viewer_id) or idea.is_collaborator(viewer_id):
        return True
    if idea.visibility == Visibility.PUBLIC:
        return True
    return (
        idea.visibility == Visibility.GROUP
        and idea.allowed_group is not None
        and idea.allowed_group.id in viewer_group_ids
    )


def is_in_scope(idea: Idea, actor: Actor, actor_group_ids: Collection[str]) -> bool:
    """Whether the idea exists as far as the actor is concerned.

    Sidelined ideas stay in scope. Ideas of the actor's own team are in
    scope even when not visible, so admins can manage them.
    """
    if actor.team_id is not None and idea.team_id == actor.team_id:
        return True
    return is_visible_to(idea, actor.user_id, actor_group_ids)
