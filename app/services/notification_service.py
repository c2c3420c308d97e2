# app/services/notification_service.py
"""
Review Notification Service
In-app notifications for review sharing events, with best-effort email.

Events:
- review_requested: a student shared a document (to the mentor)
- review_completed: the mentor verified the review (to the student)
- review_rejected: the mentor declined the review (to the student)
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.crud import notification as notification_crud
from app.crud import user as user_crud
from app.models.notification import Notification
from app.models.review import DOCUMENT_LABELS
from app.models.user import User
from app.utils.email import is_email_enabled, send_email

logger = logging.getLogger(__name__)

REVIEW_REQUESTED = "review_requested"
REVIEW_COMPLETED = "review_completed"
REVIEW_REJECTED = "review_rejected"

EMAIL_SUBJECT_BY_EVENT = {
    REVIEW_REQUESTED: "A student shared a document for your review",
    REVIEW_COMPLETED: "Your mentor finished reviewing your document",
    REVIEW_REJECTED: "Your mentor declined to review your document",
}


# ======================
# IN-APP NOTIFICATIONS
# ======================

def create_notification(
    db: Session,
    *,
    recipient_id: int,
    actor_id: Optional[int],
    review_request_id: Optional[int],
    event_type: str,
    message: str,
) -> Notification:
    return notification_crud.create_notification(
        db,
        recipient_id=recipient_id,
        actor_id=actor_id,
        review_request_id=review_request_id,
        event_type=event_type,
        message=message,
    )


def list_user_notifications(
    db: Session,
    *,
    user_id: int,
    unread_only: bool = False,
    limit: int = 50,
) -> List[Notification]:
    return notification_crud.get_notifications_for_user(db, user_id, unread_only, limit)


def get_unread_count(db: Session, *, user_id: int) -> int:
    return notification_crud.count_unread(db, user_id)


def mark_notification_read(db: Session, *, user_id: int, notification_id: int) -> Optional[Notification]:
    """Mark one of the user's notifications read; None if it is not theirs."""
    notification = notification_crud.get_notification_for_user(db, notification_id, user_id)
    if notification is None:
        return None
    notification_crud.mark_read(db, notification)
    db.commit()
    return notification


def mark_all_notifications_read(db: Session, *, user_id: int) -> int:
    updated = notification_crud.mark_all_read(db, user_id)
    db.commit()
    return updated


# ======================
# EMAIL DELIVERY
# ======================

def compose_email(recipient: User, notification: Notification) -> Tuple[str, str]:
    """Subject and plain-text body for a review notification."""
    subject = EMAIL_SUBJECT_BY_EVENT.get(notification.event_type, "New review update on CareerNav")
    greeting = (recipient.name or "").strip() or "there"

    lines = [f"Hi {greeting},", "", notification.message, ""]
    review = notification.review_request
    if review is not None:
        label = DOCUMENT_LABELS[review.document_type]
        lines.append(f"Document: {label.capitalize()} #{review.document_id}")
        lines.append(f"Review status: {review.status.value}")
        if review.rating is not None:
            lines.append(f"Rating: {review.rating}/5")
        if review.feedback:
            lines.extend(["", "Feedback:", review.feedback])
        lines.append("")
    lines.append("Open CareerNav to see the full review.")
    return subject, "\n".join(lines)


def _deliver(to_email: str, subject: str, body_text: str, notification_id: Optional[int]) -> None:
    if not send_email(to_email=to_email, subject=subject, body_text=body_text):
        logger.info("Review email not delivered (notification_id=%s)", notification_id)


def dispatch_email_for_notification(db: Session, notification: Optional[Notification]) -> bool:
    """
    Email a committed notification on a background thread.

    Returns True once delivery has been handed off. Never raises; the review
    operation that raised the notification has already succeeded.
    """
    if notification is None or not is_email_enabled():
        return False

    try:
        recipient = user_crud.get_user(db, notification.recipient_id)
        if recipient is None or not recipient.email:
            return False
        subject, body_text = compose_email(recipient, notification)
    except Exception as exc:
        logger.warning("Review email skipped (notification_id=%s): %s", notification.id, exc)
        return False

    threading.Thread(
        target=_deliver,
        args=(recipient.email, subject, body_text, notification.id),
        daemon=True,
    ).start()
    return True
