"""Unit tests for group visibility SQL."""

from sqlalchemy.dialects import postgresql

from iam.infrastructure.group_repository import visible_group_ids


def test_visible_group_ids_covers_owner_and_members():
    sql = str(
        visible_group_ids("01USER").compile(
            dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}
        )
    )

    assert "groups.owner_id = '01USER'" in sql
    assert "group_members.user_id = '01USER'" in sql
