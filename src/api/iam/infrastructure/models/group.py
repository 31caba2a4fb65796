"""SQLAlchemy ORM models for groups and their members."""

from sqlalchemy import Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin

group_members = Table(
    "group_members",
    Base.metadata,
    Column(
        "group_id",
        String(26),
        ForeignKey("groups.id", ondelete="CASCADE"),
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


class GroupModel(Base, TimestampMixin):
    """ORM model for groups table.

    Membership lives in the group_members association table. The owner is
    referenced directly and is not listed in group_members unless they
    were added explicitly.
    """

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    owner_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<GroupModel(id={self.id}, owner_id={self.owner_id}, name={self.name})>"
