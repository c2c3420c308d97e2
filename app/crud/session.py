# app/crud/session.py
"""
Session snapshot queries consumed by the eligibility engine.
"""

from sqlalchemy.orm import Session, joinedload, selectinload
from typing import List

from app.models.session import Session as SessionModel, INACTIVE_SESSION_STATUSES


def get_active_sessions_for_student(db: Session, student_id: int) -> List[SessionModel]:
    """
    Get every non-cancelled, non-rejected session for a student with its
    payment, schedule items and mentor loaded.
    
    Args:
        db: Database session
        student_id: Student user ID
        
    Returns:
        List of Session objects ordered by id
    """
    return (
        db.query(SessionModel)
        .options(
            joinedload(SessionModel.mentor),
            joinedload(SessionModel.payment),
            selectinload(SessionModel.schedule_items),
        )
        .filter(
            SessionModel.student_id == student_id,
            SessionModel.status.notin_(INACTIVE_SESSION_STATUSES),
        )
        .order_by(SessionModel.id)
        .all()
    )
