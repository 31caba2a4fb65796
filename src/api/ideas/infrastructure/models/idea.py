"""SQLAlchemy ORM models for ideas, collaborators and counters."""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin

idea_collaborators = Table(
    "idea_collaborators",
    Base.metadata,
    Column(
        "idea_id",
        String(26),
        ForeignKey("ideas.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class IdeaModel(Base, TimestampMixin):
    """ORM model for ideas table.

    (numbering_scope, idea_number) is unique so a numbering collision can
    never be committed, whatever the counter rows say.
    """

    __tablename__ = "ideas"
    __table_args__ = (
        UniqueConstraint(
            "numbering_scope",
            "idea_number",
            name="uq_ideas_numbering_scope_idea_number",
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    idea_number: Mapped[int] = mapped_column(Integer, nullable=False)
    global_counter: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    numbering_scope: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    opportunity: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tags: Mapped[str] = mapped_column(Text, nullable=False, default="")
    stage_gate: Mapped[str] = mapped_column(String(32), nullable=False, default="IDEA")
    is_sidelined: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    visibility: Mapped[str] = mapped_column(
        String(16), nullable=False, default="PRIVATE"
    )
    allowed_group_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    owner_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    team_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("teams.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<IdeaModel(id={self.id}, scope={self.numbering_scope}, "
            f"number={self.idea_number})>"
        )


class IdeaCounterModel(Base):
    """One row per numbering scope, plus the ``global`` row."""

    __tablename__ = "idea_counters"

    scope: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
