from typing import Optional

from sqlmodel import Field, SQLModel

EVENT_GOAL = "GOAL"


class MatchEvent(SQLModel, table=True):
    __tablename__ = "match_event"

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    player_id: int
    event_type: str = Field(default=EVENT_GOAL)  # GOAL
    minute: Optional[int] = Field(default=None)
