from typing import Optional

from sqlmodel import Field, SQLModel


class MatchLineup(SQLModel, table=True):
    """One row per player who took part in a match. Written with the match, never edited."""

    __tablename__ = "match_lineup"

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    team_id: int = Field(foreign_key="team.id")
    player_id: int
    is_starter: bool = Field(default=True)
    xp_earned: int = Field(default=0)  # filled in by stats processing
