"""Unit tests for the Idea aggregate."""

import pytest

from ideas.domain.aggregates import Idea
from ideas.domain.value_objects import Contributor, GroupRef, StageGate, Visibility


@pytest.fixture
def owner() -> Contributor:
    return Contributor(id="01OWNER", email="ada@example.com", username="ada")


@pytest.fixture
def group() -> GroupRef:
    return GroupRef(id="01GROUP", name="Platform")


def _create(owner: Contributor, **overrides) -> Idea:
    params = dict(
        title="Solar roofs",
        description="Put panels on every office",
        owner=owner,
        team_id="01TEAM",
        numbering_scope="01TEAM",
        idea_number=3,
        global_counter=17,
    )
    params.update(overrides)
    return Idea.create(**params)


class TestIdeaFactory:
    def test_defaults(self, owner):
        idea = _create(owner)

        assert idea.stage_gate == StageGate.IDEA
        assert idea.is_sidelined is False
        assert idea.visibility == Visibility.PRIVATE
        assert idea.allowed_group is None
        assert idea.collaborators == []
        assert idea.opportunity == ""
        assert idea.tags == ""
        assert (idea.idea_number, idea.global_counter) == (3, 17)

    def test_group_visibility_keeps_group(self, owner, group):
        idea = _create(owner, visibility=Visibility.GROUP, allowed_group=group)

        assert idea.allowed_group == group

    def test_group_visibility_requires_group(self, owner):
        with pytest.raises(ValueError, match="allowedGroupId is required"):
            _create(owner, visibility=Visibility.GROUP)

    def test_group_is_dropped_for_other_visibilities(self, owner, group):
        idea = _create(owner, visibility=Visibility.PUBLIC, allowed_group=group)

        assert idea.allowed_group is None

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("title", "   ", "title cannot be empty"),
            ("title", "x" * 256, "255"),
            ("description", "", "description cannot be empty"),
        ],
    )
    def test_validation(self, owner, field, value, message):
        with pytest.raises(ValueError, match=message):
            _create(owner, **{field: value})


class TestIdeaUpdate:
    def test_only_supplied_fields_change(self, owner):
        idea = _create(owner, tags="energy")

        idea.apply_update(title="Solar carports")

        assert idea.title == "Solar carports"
        assert idea.description == "Put panels on every office"
        assert idea.tags == "energy"

    def test_stage_gate_alone_leaves_sideline_flag(self, owner):
        idea = _create(owner)

        idea.apply_update(stage_gate=StageGate.SIDELINED)

        assert idea.stage_gate == StageGate.SIDELINED
        assert idea.is_sidelined is False

    def test_switch_to_group_needs_group(self, owner):
        idea = _create(owner)

        with pytest.raises(ValueError):
            idea.apply_update(visibility=Visibility.GROUP)

        assert idea.visibility == Visibility.PRIVATE

    def test_switch_to_group_with_group(self, owner, group):
        idea = _create(owner)

        idea.apply_update(visibility=Visibility.GROUP, allowed_group=group)

        assert idea.visibility == Visibility.GROUP
        assert idea.allowed_group == group

    def test_leaving_group_clears_group(self, owner, group):
        idea = _create(owner, visibility=Visibility.GROUP, allowed_group=group)

        idea.apply_update(visibility=Visibility.PUBLIC)

        assert idea.allowed_group is None

    def test_moving_between_groups(self, owner, group):
        idea = _create(owner, visibility=Visibility.GROUP, allowed_group=group)
        other = GroupRef(id="01OTHER", name="Research")

        idea.apply_update(allowed_group=other)

        assert idea.allowed_group == other

    def test_group_alone_is_ignored_when_not_group_visible(self, owner, group):
        idea = _create(owner)

        idea.apply_update(allowed_group=group)

        assert idea.allowed_group is None
        assert idea.visibility == Visibility.PRIVATE

    def test_invalid_update_changes_nothing(self, owner):
        idea = _create(owner)

        with pytest.raises(ValueError):
            idea.apply_update(title="", tags="new")

        assert idea.tags == ""


class TestSideline:
    def test_toggle_on_and_off(self, owner):
        idea = _create(owner)
        idea.apply_update(stage_gate=StageGate.LAUNCHED)

        idea.toggle_sideline()
        assert idea.is_sidelined is True
        assert idea.stage_gate == StageGate.SIDELINED

        idea.toggle_sideline()
        assert idea.is_sidelined is False
        assert idea.stage_gate == StageGate.IDEA


class TestCollaborators:
    def test_add_is_idempotent(self, owner):
        idea = _create(owner)
        grace = Contributor(id="01GRACE", email="grace@example.com", username="grace")

        idea.add_collaborator(grace)
        idea.add_collaborator(grace)

        assert idea.collaborators == [grace]
        assert idea.is_collaborator("01GRACE")

    def test_remove(self, owner):
        idea = _create(owner)
        grace = Contributor(id="01GRACE", email="grace@example.com", username="grace")
        idea.add_collaborator(grace)

        idea.remove_collaborator("01GRACE")
        idea.remove_collaborator("01GRACE")

        assert idea.collaborators == []
