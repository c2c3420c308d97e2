# app/crud/review.py
"""
Review Request CRUD Operations
Database access for the review ledger
"""

from sqlalchemy.orm import Session, joinedload
from typing import Optional, List
from datetime import datetime, UTC

from app.models.review import ReviewRequest, ReviewStatus, DocumentType


# ======================
# LEDGER QUERIES
# ======================

def get_review_requests_for_document(
    db: Session,
    document_id: int,
    document_type: DocumentType,
    student_id: int
) -> List[ReviewRequest]:
    """
    Get every review request ever created for a document key.

    Args:
        db: Database session
        document_id: Document identifier
        document_type: RESUME or COVER_LETTER
        student_id: Owning student user ID

    Returns:
        List of ReviewRequest objects, newest first
    """
    return (
        db.query(ReviewRequest)
        .options(joinedload(ReviewRequest.mentor))
        .filter(
            ReviewRequest.document_id == document_id,
            ReviewRequest.document_type == document_type,
            ReviewRequest.student_id == student_id,
        )
        .order_by(ReviewRequest.created_at.desc(), ReviewRequest.id.desc())
        .all()
    )


def get_review_request_for_mentor(
    db: Session,
    request_id: int,
    mentor_id: int
) -> Optional[ReviewRequest]:
    """
    Get a review request only if it is assigned to the given mentor.

    Args:
        db: Database session
        request_id: Review request identifier
        mentor_id: Mentor user ID

    Returns:
        ReviewRequest object or None if not found or assigned elsewhere
    """
    return db.query(ReviewRequest).filter(
        ReviewRequest.id == request_id,
        ReviewRequest.mentor_id == mentor_id
    ).first()


def get_review_requests_by_mentor(
    db: Session,
    mentor_id: int,
    status: Optional[ReviewStatus] = None,
    limit: int = 50,
    offset: int = 0
) -> List[ReviewRequest]:
    """
    Get the review requests assigned to a mentor.

    Args:
        db: Database session
        mentor_id: Mentor user ID
        status: Optional status filter
        limit: Maximum requests to return
        offset: Number of requests to skip

    Returns:
        List of ReviewRequest objects, newest first
    """
    query = (
        db.query(ReviewRequest)
        .options(joinedload(ReviewRequest.student))
        .filter(ReviewRequest.mentor_id == mentor_id)
    )
    if status is not None:
        query = query.filter(ReviewRequest.status == status)
    return (
        query.order_by(ReviewRequest.created_at.desc(), ReviewRequest.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


# ======================
# LEDGER WRITES
# ======================

def create_review_request(
    db: Session,
    document_id: int,
    document_type: DocumentType,
    student_id: int,
    mentor_id: int
) -> ReviewRequest:
    """
    Insert a PENDING review request. Flushes so the unique document
    constraint is checked inside the caller's transaction.

    Raises:
        sqlalchemy.exc.IntegrityError: If the document is already claimed
    """
    request = ReviewRequest(
        document_id=document_id,
        document_type=document_type,
        student_id=student_id,
        mentor_id=mentor_id,
        status=ReviewStatus.PENDING
    )

    db.add(request)
    db.flush()
    return request


def mark_review_verified(
    db: Session,
    request: ReviewRequest,
    rating: int,
    feedback: Optional[str] = None
) -> ReviewRequest:
    request.status = ReviewStatus.VERIFIED
    request.rating = rating
    request.feedback = feedback
    request.reviewed_at = datetime.now(UTC)

    db.flush()
    return request


def mark_review_rejected(
    db: Session,
    request: ReviewRequest,
    feedback: Optional[str] = None
) -> ReviewRequest:
    request.status = ReviewStatus.REJECTED
    request.feedback = feedback
    request.reviewed_at = datetime.now(UTC)

    db.flush()
    return request
