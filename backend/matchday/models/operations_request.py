from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import JSON
from sqlmodel import Column, Field, SQLModel

from matchday.utils.clock import utcnow


class RequestType(str, Enum):
    WANTED_JOKER = "WANTED_JOKER"  # team is short a player
    WANTED_REF = "WANTED_REF"
    I_AM_AVAILABLE = "I_AM_AVAILABLE"


REQUEST_OPEN = "OPEN"
REQUEST_LOCKED = "LOCKED"


class OperationsRequest(SQLModel, table=True):
    __tablename__ = "operations_request"

    id: Optional[int] = Field(default=None, primary_key=True)
    requester_id: int = Field(index=True)
    zone_id: int = Field(index=True)
    type: str  # RequestType value
    match_time: Optional[datetime] = Field(default=None)
    venue_name: Optional[str] = Field(default=None)
    details: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    status: str = Field(default=REQUEST_OPEN, index=True)  # OPEN | LOCKED
    responder_id: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    locked_at: Optional[datetime] = Field(default=None)
