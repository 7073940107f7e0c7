from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

from matchday.utils.clock import utcnow


class MatchStatus(str, Enum):
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"


class Match(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    season_id: Optional[int] = Field(default=None)
    team_a_id: int = Field(foreign_key="team.id", index=True)
    team_b_id: int = Field(foreign_key="team.id", index=True)
    venue_id: Optional[int] = Field(default=None)  # venue directory is external
    score_a: int = Field(default=0)
    score_b: int = Field(default=0)
    creator_id: int
    status: str = Field(default=MatchStatus.PENDING_VERIFICATION.value, index=True)
    played_at: datetime = Field(default_factory=utcnow, index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    resolved_at: Optional[datetime] = Field(default=None)
