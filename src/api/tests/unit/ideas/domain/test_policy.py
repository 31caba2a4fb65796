"""Unit tests for the idea authorization table."""

import pytest

from ideas.domain.aggregates import Idea
from ideas.domain.policy import is_permitted
from ideas.domain.value_objects import Actor, Contributor
from shared_kernel.authorization import Action

OWNER = Actor(user_id="01OWNER", team_id="01TEAM")
COLLABORATOR = Actor(user_id="01COLLAB", team_id="01TEAM")
ADMIN = Actor(user_id="01ADMIN", team_id="01TEAM", is_admin=True)
OTHER = Actor(user_id="01OTHER", team_id="01TEAM")


@pytest.fixture
def idea() -> Idea:
    idea = Idea.create(
        title="Solar roofs",
        description="Panels",
        owner=Contributor(id="01OWNER", email="o@example.com", username="owner"),
        team_id="01TEAM",
        numbering_scope="01TEAM",
        idea_number=1,
        global_counter=1,
    )
    idea.add_collaborator(
        Contributor(id="01COLLAB", email="c@example.com", username="collab")
    )
    return idea


@pytest.mark.parametrize(
    ("action", "allowed"),
    [
        (Action.VIEW, {OWNER, COLLABORATOR, ADMIN, OTHER}),
        (Action.EDIT, {OWNER, COLLABORATOR, ADMIN}),
        (Action.SIDELINE, {OWNER, ADMIN}),
        (Action.DELETE, {OWNER, ADMIN}),
        (Action.ADD_COLLABORATOR, {OWNER, COLLABORATOR}),
        (Action.REMOVE_COLLABORATOR, {OWNER}),
    ],
)
def test_permission_table(idea, action, allowed):
    for actor in (OWNER, COLLABORATOR, ADMIN, OTHER):
        assert is_permitted(actor, idea, action) is (actor in allowed), actor


@pytest.mark.parametrize("action", [Action.MANAGE, Action.INVITE])
def test_group_actions_do_not_apply(idea, action):
    with pytest.raises(ValueError):
        is_permitted(OWNER, idea, action)
