# app/services/review_service.py
"""
Review Sharing Service Layer
Eligibility resolution, the share transaction and the mentor side of the
review lifecycle.
"""

import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional, Dict, Any, List, NamedTuple

from app.crud import review as review_crud
from app.crud import session as session_crud
from app.exceptions import (
    AlreadyClaimedError,
    InvalidRatingError,
    InvalidReviewStateError,
    NotEligibleError,
    ReviewNotFoundError,
)
from app.models.review import DOCUMENT_LABELS, ReviewRequest, ReviewStatus, DocumentType
from app.services import eligibility, notification_service
from app.services.review_ledger import ReviewLedger

logger = logging.getLogger(__name__)


def _user_name(user) -> str:
    if user is not None and user.name:
        return user.name
    return eligibility.UNKNOWN_MENTOR_NAME


def _mentor_dict(mentor_id: int, mentor_name: str) -> Dict[str, Any]:
    return {"mentor_id": mentor_id, "mentor_name": mentor_name}


def format_review_request(request: ReviewRequest) -> Dict[str, Any]:
    return {
        "id": request.id,
        "document_id": request.document_id,
        "document_type": request.document_type,
        "student_id": request.student_id,
        "mentor_id": request.mentor_id,
        "mentor_name": _user_name(request.mentor),
        "status": request.status,
        "rating": request.rating,
        "feedback": request.feedback,
        "created_at": request.created_at,
        "reviewed_at": request.reviewed_at,
    }


# ======================
# ELIGIBILITY RESOLUTION
# ======================

class DocumentEligibility(NamedTuple):
    """Every stage of one document's eligibility resolution."""
    ledger: ReviewLedger
    evaluation: eligibility.EnrollmentEvaluation
    mentors: List[eligibility.MentorCandidate]

    @property
    def reason(self) -> Optional[eligibility.EligibilityReason]:
        return eligibility.diagnose(self.evaluation, self.mentors)


def evaluate_document(
    db: Session,
    student_id: int,
    document_id: int,
    document_type: DocumentType
) -> DocumentEligibility:
    """
    Run the eligibility pipeline for one document.

    Once the document has any review request, whatever its status, no
    mentor is offered at all.

    Args:
        db: Database session
        student_id: Student user ID
        document_id: Document identifier
        document_type: RESUME or COVER_LETTER

    Returns:
        DocumentEligibility with the ledger, every pipeline stage and the
        mentors the document may be shared with
    """
    ledger = ReviewLedger(
        review_crud.get_review_requests_for_document(db, document_id, document_type, student_id)
    )
    sessions = session_crud.get_active_sessions_for_student(db, student_id)
    evaluation = eligibility.evaluate_enrollments(sessions)

    claimed = ledger.claimed_mentor_ids
    mentors = [c for c in evaluation.candidates if c.mentor_id not in claimed]
    # A claimed document is locked for every mentor, not only the one holding it
    if ledger.is_claimed:
        mentors = []
    return DocumentEligibility(ledger, evaluation, mentors)


def resolve_eligible_mentors(
    db: Session,
    student_id: int,
    document_id: int,
    document_type: DocumentType
) -> Dict[str, Any]:
    """
    Resolve which mentors a student may share a document with.

    Never raises for "no data" outcomes: an empty list always comes back
    with a reason code naming the stage that emptied it.

    Returns:
        Dictionary with mentors, has_active_review, pending_review_mentor
        and reason
    """
    result = evaluate_document(db, student_id, document_id, document_type)
    reason = result.reason

    active = result.ledger.active_review
    pending_review_mentor = None
    if active is not None:
        pending_review_mentor = _mentor_dict(active.mentor_id, _user_name(active.mentor))

    if reason is not None:
        logger.debug(
            "No eligible mentors for student_id=%s %s=%s: %s",
            student_id,
            document_type.value,
            document_id,
            reason.value,
        )

    return {
        "mentors": [_mentor_dict(m.mentor_id, m.mentor_name) for m in result.mentors],
        "has_active_review": active is not None,
        "pending_review_mentor": pending_review_mentor,
        "reason": reason.value if reason else None,
    }


def list_student_enrollments(db: Session, student_id: int) -> List[Dict[str, Any]]:
    """Derived enrollments with their payment-gate and classifier verdicts."""
    sessions = session_crud.get_active_sessions_for_student(db, student_id)
    enrollments = eligibility.aggregate_enrollments(sessions)
    return [
        {
            "mentor_id": e.mentor_id,
            "mentor_name": e.mentor_name,
            "skill_name": e.skill_name,
            "session_ids": [s.session_id for s in e.sessions],
            "has_payment": eligibility.has_successful_payment(e),
            "is_ongoing": eligibility.is_ongoing(e),
        }
        for e in enrollments.values()
    ]


# ======================
# SHARE TRANSACTION
# ======================

def share_document(
    db: Session,
    student_id: int,
    document_id: int,
    document_type: DocumentType,
    mentor_id: int
) -> ReviewRequest:
    """
    Share a document with one mentor by creating a PENDING review request.

    The claimed-state check, the eligibility re-check and the insert all run
    in one transaction; the unique document constraint rejects a racing
    second insert.

    Args:
        db: Database session
        student_id: Student user ID
        document_id: Document identifier
        document_type: RESUME or COVER_LETTER
        mentor_id: Chosen mentor user ID

    Returns:
        Created ReviewRequest

    Raises:
        AlreadyClaimedError: The document already has a review request
        NotEligibleError: The mentor is not currently eligible
    """
    label = DOCUMENT_LABELS[document_type]
    try:
        result = evaluate_document(db, student_id, document_id, document_type)
        if result.ledger.is_claimed:
            raise AlreadyClaimedError(
                f"This {label} has already been shared with a mentor and cannot be shared again"
            )

        if mentor_id not in {m.mentor_id for m in result.mentors}:
            raise NotEligibleError(
                f"Mentor {mentor_id} is not eligible: an ongoing, paid enrollment with this mentor is required"
            )

        request = review_crud.create_review_request(
            db=db,
            document_id=document_id,
            document_type=document_type,
            student_id=student_id,
            mentor_id=mentor_id
        )
        notification = notification_service.create_notification(
            db,
            recipient_id=mentor_id,
            actor_id=student_id,
            review_request_id=request.id,
            event_type=notification_service.REVIEW_REQUESTED,
            message=f"A student shared their {label} with you for review.",
        )
        db.commit()

    except IntegrityError:
        db.rollback()
        logger.info(
            "Share lost race for student_id=%s %s=%s (mentor_id=%s)",
            student_id,
            document_type.value,
            document_id,
            mentor_id,
        )
        raise AlreadyClaimedError(
            f"This {label} has already been shared with a mentor and cannot be shared again"
        ) from None
    except Exception:
        db.rollback()
        raise

    db.refresh(request)
    logger.info(
        "Shared %s=%s of student_id=%s with mentor_id=%s (review_request_id=%s)",
        document_type.value,
        document_id,
        student_id,
        mentor_id,
        request.id,
    )
    notification_service.dispatch_email_for_notification(db, notification)
    return request


# ======================
# REVIEW RETRIEVAL
# ======================

def list_document_reviews(
    db: Session,
    student_id: int,
    document_id: int,
    document_type: DocumentType
) -> List[Dict[str, Any]]:
    requests = review_crud.get_review_requests_for_document(db, document_id, document_type, student_id)
    return [format_review_request(r) for r in requests]


def list_mentor_review_requests(
    db: Session,
    mentor_id: int,
    status: Optional[ReviewStatus] = None,
    limit: int = 50,
    offset: int = 0
) -> List[Dict[str, Any]]:
    """
    Get a mentor's review inbox.

    Args:
        db: Database session
        mentor_id: Mentor user ID
        status: Optional status filter
        limit: Maximum requests to return
        offset: Number of requests to skip

    Returns:
        List of formatted review request dictionaries with student names
    """
    requests = review_crud.get_review_requests_by_mentor(db, mentor_id, status, limit, offset)
    results = []
    for r in requests:
        item = format_review_request(r)
        item["student_name"] = r.student.name if r.student else "Unknown Student"
        results.append(item)
    return results


# ======================
# MENTOR DECISIONS
# ======================

def _get_pending_request(db: Session, request_id: int, mentor_id: int) -> ReviewRequest:
    request = review_crud.get_review_request_for_mentor(db, request_id, mentor_id)
    if not request:
        raise ReviewNotFoundError("Review not found or access denied")
    if request.status != ReviewStatus.PENDING:
        raise InvalidReviewStateError(
            f"Review has already been {request.status.value.lower()}. Cannot review again."
        )
    return request


def complete_review(
    db: Session,
    mentor_id: int,
    request_id: int,
    rating: Optional[int],
    feedback: Optional[str] = None
) -> ReviewRequest:
    """
    Verify a pending review with a required 1-5 rating.

    Raises:
        ReviewNotFoundError: Unknown request or assigned to another mentor
        InvalidReviewStateError: Request is not PENDING
        InvalidRatingError: Rating missing or out of range
    """
    request = _get_pending_request(db, request_id, mentor_id)
    if rating is None or not (1 <= rating <= 5):
        raise InvalidRatingError("Rating is required and must be between 1 and 5")

    label = DOCUMENT_LABELS[request.document_type]
    try:
        review_crud.mark_review_verified(db, request, rating, feedback)
        notification = notification_service.create_notification(
            db,
            recipient_id=request.student_id,
            actor_id=mentor_id,
            review_request_id=request.id,
            event_type=notification_service.REVIEW_COMPLETED,
            message=f"Your {label} review is complete: rated {rating}/5.",
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Review request %s verified by mentor_id=%s (rating=%s)", request.id, mentor_id, rating)
    notification_service.dispatch_email_for_notification(db, notification)
    return request


def reject_review(
    db: Session,
    mentor_id: int,
    request_id: int,
    feedback: Optional[str] = None
) -> ReviewRequest:
    """Decline a pending review. The document stays claimed."""
    request = _get_pending_request(db, request_id, mentor_id)

    label = DOCUMENT_LABELS[request.document_type]
    try:
        review_crud.mark_review_rejected(db, request, feedback)
        notification = notification_service.create_notification(
            db,
            recipient_id=request.student_id,
            actor_id=mentor_id,
            review_request_id=request.id,
            event_type=notification_service.REVIEW_REJECTED,
            message=f"Your mentor declined to review your {label}.",
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Review request %s rejected by mentor_id=%s", request.id, mentor_id)
    notification_service.dispatch_email_for_notification(db, notification)
    return request
