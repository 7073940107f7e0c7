"""Notification dispatch.

Writes an inbox row per notification. Engine code never lets a failed
notification fail the operation that triggered it: use dispatch_quietly().
"""

import logging
from typing import List

from sqlmodel import Session, select

from matchday.models.notification import Notification

logger = logging.getLogger(__name__)

MATCH_VERIFY = "MATCH_VERIFY"
MATCH_CONFIRMED = "MATCH_CONFIRMED"
MATCH_REJECTED = "MATCH_REJECTED"
REQUEST_ACCEPTED = "REQUEST_ACCEPTED"


class NotificationService:
    """Inbox-backed notification sender bound to a session."""

    def __init__(self, session: Session):
        self.session = session

    def send(self, user_id: int, notification_type: str, title: str, message: str) -> Notification:
        notification = Notification(
            user_id=user_id,
            notification_type=notification_type,
            title=title,
            message=message,
        )
        self.session.add(notification)
        self.session.commit()
        self.session.refresh(notification)
        logger.info(f"Notification {notification_type} sent to user {user_id}")
        return notification


def dispatch_quietly(session: Session, user_id: int, notification_type: str, title: str, message: str) -> bool:
    """
    Fire-and-forget send. Call only after the triggering work is committed.

    Returns:
        True if the notification was stored, False if it failed (failure is logged).
    """
    try:
        NotificationService(session).send(user_id, notification_type, title, message)
        return True
    except Exception as e:
        session.rollback()
        logger.warning(f"Notification {notification_type} to user {user_id} failed: {e}")
        return False


def list_notifications(session: Session, user_id: int, unread_only: bool = False) -> List[Notification]:
    query = select(Notification).where(Notification.user_id == user_id)
    if unread_only:
        query = query.where(Notification.is_read == False)  # noqa: E712
    query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
    return list(session.exec(query).all())
