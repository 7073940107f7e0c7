from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from matchday.database import get_session
from matchday.services.notification_service import list_notifications

router = APIRouter()


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    notification_type: str
    title: str
    message: str
    is_read: bool
    created_at: datetime


@router.get("/users/{user_id}/notifications", response_model=List[NotificationResponse])
def get_notifications(user_id: int, unread_only: bool = Query(False), session: Session = Depends(get_session)):
    """User inbox, newest first"""
    return list_notifications(session, user_id, unread_only)
