"""Inbox row written for every notification dispatched to a user."""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from matchday.utils.clock import utcnow


class Notification(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    notification_type: str  # MATCH_VERIFY | MATCH_CONFIRMED | MATCH_REJECTED | REQUEST_ACCEPTED | ...
    title: str
    message: str
    is_read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)
