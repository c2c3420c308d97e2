# app/models/__init__.py
# Import models in dependency order
from .user import User, UserRole
from .session import Session, Payment, ScheduleItem, SessionStatus, PaymentStatus, ScheduleStatus
from .review import ReviewRequest, ReviewStatus, DocumentType
from .notification import Notification

__all__ = [
    "User",
    "UserRole",
    "Session",
    "Payment",
    "ScheduleItem",
    "SessionStatus",
    "PaymentStatus",
    "ScheduleStatus",
    "ReviewRequest",
    "ReviewStatus",
    "DocumentType",
    "Notification",
]
