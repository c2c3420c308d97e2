# app/crud/notification.py
"""
Notification CRUD Operations
In-app notifications raised by review sharing events
"""

from sqlalchemy.orm import Session
from typing import Optional, List

from app.models.notification import Notification


def _unread_for(db: Session, user_id: int):
    return db.query(Notification).filter(
        Notification.recipient_id == user_id,
        Notification.is_read.is_(False),
    )


def get_notifications_for_user(
    db: Session,
    user_id: int,
    unread_only: bool = False,
    limit: int = 50
) -> List[Notification]:
    """
    Get a user's notifications.

    Args:
        db: Database session
        user_id: Recipient user ID
        unread_only: Only return unread notifications
        limit: Maximum notifications to return

    Returns:
        List of Notification objects, newest first
    """
    query = _unread_for(db, user_id) if unread_only else (
        db.query(Notification).filter(Notification.recipient_id == user_id)
    )
    return (
        query.order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def get_notification_for_user(
    db: Session,
    notification_id: int,
    user_id: int
) -> Optional[Notification]:
    """Get a notification only if it was sent to the given user."""
    return db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.recipient_id == user_id
    ).first()


def count_unread(db: Session, user_id: int) -> int:
    return _unread_for(db, user_id).count()


def create_notification(
    db: Session,
    recipient_id: int,
    actor_id: Optional[int],
    review_request_id: Optional[int],
    event_type: str,
    message: str
) -> Notification:
    """
    Insert a notification inside the caller's transaction.

    Flushes so the row has an id; the caller commits together with the
    review state change that raised it.
    """
    notification = Notification(
        recipient_id=recipient_id,
        actor_id=actor_id,
        review_request_id=review_request_id,
        event_type=event_type,
        message=message
    )

    db.add(notification)
    db.flush()
    return notification


def mark_read(db: Session, notification: Notification) -> Notification:
    notification.is_read = True
    db.flush()
    return notification


def mark_all_read(db: Session, user_id: int) -> int:
    """Mark every unread notification of a user as read; returns the count."""
    updated = _unread_for(db, user_id).update({"is_read": True}, synchronize_session=False)
    db.flush()
    return int(updated)
