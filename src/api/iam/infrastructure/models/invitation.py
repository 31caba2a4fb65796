"""SQLAlchemy ORM model for the group_invitations table."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class GroupInvitationModel(Base, TimestampMixin):
    """ORM model for group_invitations table.

    The (group_id, receiver_id) unique constraint guarantees a single
    invitation record per pair; re-invites update that record in place.
    """

    __tablename__ = "group_invitations"
    __table_args__ = (
        UniqueConstraint("group_id", "receiver_id", name="uq_group_invitations_group_receiver"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    receiver_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<GroupInvitationModel(id={self.id}, group_id={self.group_id}, "
            f"receiver_id={self.receiver_id}, status={self.status})>"
        )
