"""Append-only audit log of captain decisions on reported matches."""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from matchday.utils.clock import utcnow

ACTION_CONFIRM = "CONFIRM"
ACTION_REJECT = "REJECT"


class MatchVerification(SQLModel, table=True):
    __tablename__ = "match_verification"

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    verifier_id: int
    action: str  # CONFIRM | REJECT
    created_at: datetime = Field(default_factory=utcnow)
