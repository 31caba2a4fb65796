"""Unit tests for ULID-backed identifiers."""

import pytest

from iam.domain.value_objects import GroupId, UserId
from ideas.domain.value_objects import IdeaId


class TestUlidIdentifier:
    def test_generate_produces_unique_ulids(self):
        first = UserId.generate()
        second = UserId.generate()

        assert first != second
        assert len(first.value) == 26

    def test_str_returns_value(self):
        user_id = UserId.generate()

        assert str(user_id) == user_id.value

    def test_from_string_round_trips(self):
        user_id = UserId.generate()

        assert UserId.from_string(user_id.value) == user_id

    @pytest.mark.parametrize("cls", [UserId, GroupId, IdeaId])
    def test_from_string_rejects_malformed_values(self, cls):
        with pytest.raises(ValueError, match=f"Invalid {cls.__name__}"):
            cls.from_string("not-a-ulid")

    def test_identifiers_are_hashable(self):
        user_id = UserId.generate()

        assert {user_id, UserId(value=user_id.value)} == {user_id}
