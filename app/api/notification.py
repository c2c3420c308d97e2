from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.services import notification_service

router = APIRouter(prefix="/users/{user_id}/notifications", tags=["Notifications"])


def _serialize(n):
    return {
        "id": n.id,
        "recipientId": n.recipient_id,
        "actorId": n.actor_id,
        "reviewRequestId": n.review_request_id,
        "eventType": n.event_type,
        "message": n.message,
        "isRead": n.is_read,
        "createdAt": n.created_at.isoformat() if n.created_at else None
    }


@router.get("")
def get_my_notifications(
    user_id: int,
    unread_only: bool = Query(False, alias="unreadOnly"),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db)
):
    notifications = notification_service.list_user_notifications(
        db,
        user_id=user_id,
        unread_only=unread_only,
        limit=limit,
    )
    return [_serialize(n) for n in notifications]


@router.get("/unread-count")
def get_unread_count(
    user_id: int,
    db: Session = Depends(get_db)
):
    return {"unreadCount": notification_service.get_unread_count(db, user_id=user_id)}


@router.patch("/read-all")
def mark_all_notifications_read(
    user_id: int,
    db: Session = Depends(get_db)
):
    count = notification_service.mark_all_notifications_read(db, user_id=user_id)
    return {"message": "All notifications marked as read", "updated": count}


@router.patch("/{notification_id}/read")
def mark_notification_read(
    user_id: int,
    notification_id: int,
    db: Session = Depends(get_db)
):
    notification = notification_service.mark_notification_read(
        db,
        user_id=user_id,
        notification_id=notification_id,
    )
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    return {"message": "Notification marked as read", "id": notification.id}
