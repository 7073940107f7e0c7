from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from matchday.utils.clock import utcnow

if TYPE_CHECKING:
    from matchday.models.team_member import TeamMember

TEAM_DRAFT = "DRAFT"
TEAM_ACTIVE = "ACTIVE"


class Team(SQLModel, table=True):
    __table_args__ = (
        # Team names are unique within a zone
        SAUniqueConstraint("zone_id", "name", name="uq_zone_team_name"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    zone_id: int = Field(index=True)
    captain_id: int = Field(index=True)  # user id (identity subsystem)
    status: str = Field(default=TEAM_DRAFT)  # DRAFT | ACTIVE
    total_matches: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow)

    members: List["TeamMember"] = Relationship(back_populates="team")
