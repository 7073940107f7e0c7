from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from matchday.utils.clock import utcnow

if TYPE_CHECKING:
    from matchday.models.team import Team

ROLE_CAPTAIN = "CAPTAIN"
ROLE_PLAYER = "PLAYER"


class TeamMember(SQLModel, table=True):
    __tablename__ = "team_member"
    __table_args__ = (
        # A user plays for at most one team
        SAUniqueConstraint("user_id", name="uq_team_member_user"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: int = Field(foreign_key="team.id", index=True)
    user_id: int
    role: str = Field(default=ROLE_PLAYER)  # CAPTAIN | PLAYER
    jersey_number: Optional[int] = Field(default=None)
    joined_at: datetime = Field(default_factory=utcnow)

    team: "Team" = Relationship(back_populates="members")
