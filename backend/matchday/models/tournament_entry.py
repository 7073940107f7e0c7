from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from matchday.models.tournament import Tournament


class TournamentEntry(SQLModel, table=True):
    __tablename__ = "tournament_entry"
    __table_args__ = (SAUniqueConstraint("tournament_id", "team_id", name="uq_tournament_entry_team"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    tournament_id: int = Field(foreign_key="tournament.id", index=True)
    team_id: int = Field(foreign_key="team.id")
    group_name: Optional[str] = Field(default=None)  # set once by the draw

    # Maintained by match-confirmation processing
    points: int = Field(default=0)
    goal_diff: int = Field(default=0)
    goals_for: int = Field(default=0)
    played: int = Field(default=0)

    tournament: "Tournament" = Relationship(back_populates="entries")
