"""SQLAlchemy ORM model for the teams table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class TeamModel(Base, TimestampMixin):
    """ORM model for teams table.

    Team membership is stored on users.team_id; this table only holds
    the team's name.
    """

    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<TeamModel(id={self.id}, name={self.name})>"
