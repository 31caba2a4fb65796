"""Unit tests for the Group aggregate."""

import pytest

from iam.domain.aggregates import Group
from iam.domain.value_objects import UserId, UserSummary


def _summary(username: str) -> UserSummary:
    return UserSummary(
        id=UserId.generate(), email=f"{username}@example.com", username=username
    )


@pytest.fixture
def owner() -> UserSummary:
    return _summary("owner")


class TestGroupFactory:
    """Tests for Group.create() factory method."""

    def test_creates_empty_group_owned_by_creator(self, owner):
        group = Group.create(name="  Platform ", owner=owner)

        assert group.name == "Platform"
        assert group.owner == owner
        assert group.description == ""
        assert group.members == []

    def test_owner_is_not_a_member(self, owner):
        group = Group.create(name="Platform", owner=owner)

        assert group.is_owner(owner.id)
        assert not group.has_member(owner.id)
        assert group.is_visible_to(owner.id)

    @pytest.mark.parametrize("name", ["", "   ", "x" * 256])
    def test_rejects_invalid_names(self, owner, name):
        with pytest.raises(ValueError, match="between 1 and 255"):
            Group.create(name=name, owner=owner)


class TestGroupMembership:
    def test_add_member_is_idempotent(self, owner):
        group = Group.create(name="Platform", owner=owner)
        member = _summary("member")

        group.add_member(member)
        group.add_member(member)

        assert group.members == [member]
        assert group.is_visible_to(member.id)

    def test_remove_member(self, owner):
        group = Group.create(name="Platform", owner=owner)
        member = _summary("member")
        group.add_member(member)

        group.remove_member(member.id)

        assert group.members == []
        assert not group.is_visible_to(member.id)

    def test_remove_non_member_is_noop(self, owner):
        group = Group.create(name="Platform", owner=owner)
        member = _summary("member")
        group.add_member(member)

        group.remove_member(UserId.generate())

        assert group.members == [member]

    def test_outsider_cannot_see_group(self, owner):
        group = Group.create(name="Platform", owner=owner)

        assert not group.is_visible_to(UserId.generate())


class TestGroupUpdate:
    def test_partial_update_keeps_untouched_fields(self, owner):
        group = Group.create(name="Platform", owner=owner, description="infra")
        before = group.updated_at

        group.update_details(description="infrastructure")

        assert group.name == "Platform"
        assert group.description == "infrastructure"
        assert group.updated_at >= before

    def test_rename_validates(self, owner):
        group = Group.create(name="Platform", owner=owner)

        with pytest.raises(ValueError):
            group.update_details(name=" ")

        assert group.name == "Platform"
