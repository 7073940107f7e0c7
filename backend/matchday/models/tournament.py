from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import JSON
from sqlmodel import Column, Field, Relationship, SQLModel

from matchday.utils.clock import utcnow

if TYPE_CHECKING:
    from matchday.models.tournament_entry import TournamentEntry

TOURNAMENT_OPEN = "OPEN"
TOURNAMENT_ACTIVE = "ACTIVE"


class Tournament(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    organizer_id: int = Field(index=True)
    name: str
    status: str = Field(default=TOURNAMENT_OPEN)  # OPEN | ACTIVE
    # {"bracket_type": "GROUPS"|"LEAGUE"|"KNOCKOUT", "max_teams": 8|16|32, "entry_fee": int}
    config: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utcnow)
    started_at: Optional[datetime] = Field(default=None)

    entries: List["TournamentEntry"] = Relationship(back_populates="tournament")
