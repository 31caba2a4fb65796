"""create ideas, idea_collaborators and idea_counters tables

idea_counters holds one row per numbering scope (team id or
personal-<user id>) plus the ``global`` row. Ideas keep existing when
their allowed group is deleted; the reference is cleared.

Revision ID: 8d4b6e1f7a25
Revises: 5c7e2b8a4f13
Create Date: 2026-10-12 10:02:19.662410

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8d4b6e1f7a25"
down_revision: Union[str, Sequence[str], None] = "5c7e2b8a4f13"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "ideas",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("idea_number", sa.Integer(), nullable=False),
        sa.Column("global_counter", sa.Integer(), nullable=False),
        sa.Column("numbering_scope", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("opportunity", sa.Text(), nullable=False, server_default=""),
        sa.Column("tags", sa.Text(), nullable=False, server_default=""),
        sa.Column("stage_gate", sa.String(length=32), nullable=False),
        sa.Column("is_sidelined", sa.Boolean(), nullable=False),
        sa.Column("visibility", sa.String(length=16), nullable=False),
        sa.Column("allowed_group_id", sa.String(length=26), nullable=True),
        sa.Column("owner_id", sa.String(length=26), nullable=False),
        sa.Column("team_id", sa.String(length=26), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["allowed_group_id"],
            ["groups.id"],
            name=op.f("fk_ideas_allowed_group_id_groups"),
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["owner_id"],
            ["users.id"],
            name=op.f("fk_ideas_owner_id_users"),
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["team_id"],
            ["teams.id"],
            name=op.f("fk_ideas_team_id_teams"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_ideas")),
        sa.UniqueConstraint("global_counter", name=op.f("uq_ideas_global_counter")),
        sa.UniqueConstraint(
            "numbering_scope",
            "idea_number",
            name="uq_ideas_numbering_scope_idea_number",
        ),
    )
    op.create_index(
        op.f("ix_ideas_allowed_group_id"), "ideas", ["allowed_group_id"], unique=False
    )
    op.create_index(op.f("ix_ideas_owner_id"), "ideas", ["owner_id"], unique=False)
    op.create_index(op.f("ix_ideas_team_id"), "ideas", ["team_id"], unique=False)

    op.create_table(
        "idea_collaborators",
        sa.Column("idea_id", sa.String(length=26), nullable=False),
        sa.Column("user_id", sa.String(length=26), nullable=False),
        sa.ForeignKeyConstraint(
            ["idea_id"],
            ["ideas.id"],
            name=op.f("fk_idea_collaborators_idea_id_ideas"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("fk_idea_collaborators_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "idea_id", "user_id", name=op.f("pk_idea_collaborators")
        ),
    )
    op.create_index(
        op.f("ix_idea_collaborators_user_id"),
        "idea_collaborators",
        ["user_id"],
        unique=False,
    )

    op.create_table(
        "idea_counters",
        sa.Column("scope", sa.String(length=64), nullable=False),
        sa.Column("value", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("scope", name=op.f("pk_idea_counters")),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("idea_counters")
    op.drop_index(
        op.f("ix_idea_collaborators_user_id"), table_name="idea_collaborators"
    )
    op.drop_table("idea_collaborators")
    op.drop_index(op.f("ix_ideas_team_id"), table_name="ideas")
    op.drop_index(op.f("ix_ideas_owner_id"), table_name="ideas")
    op.drop_index(op.f("ix_ideas_allowed_group_id"), table_name="ideas")
    op.drop_table("ideas")
