# app/api/review.py
"""
Student Review Sharing API Router

Endpoints:
- GET  /students/{student_id}/documents/{document_type}/{document_id}/eligible-mentors
- POST /students/{student_id}/documents/{document_type}/{document_id}/share
- GET  /students/{student_id}/documents/{document_type}/{document_id}/reviews
- GET  /students/{student_id}/enrollments
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from app.crud import user as user_crud
from app.database import get_db
from app.exceptions import (
    AlreadyClaimedError,
    InvalidRatingError,
    InvalidReviewStateError,
    NotEligibleError,
    ReviewNotFoundError,
    ReviewSharingError,
)
from app.models.review import DocumentType
from app.models.user import UserRole
from app.schemas.enrollment import EnrollmentResponse
from app.schemas.review import (
    EligibleMentorsResponse,
    ReviewRequestResponse,
    ShareDocumentRequest,
)
from app.services import review_service

router = APIRouter(prefix="/students", tags=["review-sharing"])

STATUS_BY_ERROR = {
    AlreadyClaimedError: status.HTTP_409_CONFLICT,
    NotEligibleError: status.HTTP_400_BAD_REQUEST,
    ReviewNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidReviewStateError: status.HTTP_409_CONFLICT,
    InvalidRatingError: status.HTTP_400_BAD_REQUEST,
}


def to_http_exception(exc: ReviewSharingError) -> HTTPException:
    """Surface a domain error verbatim with its stable code."""
    return HTTPException(
        status_code=STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST),
        detail={"code": exc.code, "message": str(exc)},
    )


def _require_student(db: Session, student_id: int) -> None:
    if not user_crud.get_user_with_role(db, student_id, UserRole.STUDENT):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "STUDENT_NOT_FOUND", "message": "Student not found"}
        )


# ======================
# ELIGIBLE MENTORS
# ======================
@router.get(
    "/{student_id}/documents/{document_type}/{document_id}/eligible-mentors",
    response_model=EligibleMentorsResponse
)
def get_eligible_mentors(
    student_id: int,
    document_type: DocumentType,
    document_id: int,
    db: Session = Depends(get_db)
):
    """
    Get the mentors this document can be shared with.

    An empty list is a normal outcome; `reason` names why it is empty.
    When a review is pending, `pendingReviewMentor` names the mentor
    holding it.
    """
    _require_student(db, student_id)
    result = review_service.resolve_eligible_mentors(
        db=db,
        student_id=student_id,
        document_id=document_id,
        document_type=document_type
    )
    return EligibleMentorsResponse(**result)


# ======================
# SHARE DOCUMENT
# ======================
@router.post(
    "/{student_id}/documents/{document_type}/{document_id}/share",
    response_model=ReviewRequestResponse,
    status_code=status.HTTP_201_CREATED
)
def share_document(
    student_id: int,
    document_type: DocumentType,
    document_id: int,
    body: ShareDocumentRequest,
    db: Session = Depends(get_db)
):
    """
    Share a resume or cover letter with exactly one eligible mentor.

    Errors:
    - 409 ALREADY_CLAIMED: the document already has a review request
    - 400 NOT_ELIGIBLE: the mentor is not currently eligible
    """
    _require_student(db, student_id)
    try:
        request = review_service.share_document(
            db=db,
            student_id=student_id,
            document_id=document_id,
            document_type=document_type,
            mentor_id=body.mentor_id
        )
    except ReviewSharingError as e:
        raise to_http_exception(e)

    return ReviewRequestResponse(**review_service.format_review_request(request))


# ======================
# DOCUMENT REVIEWS
# ======================
@router.get(
    "/{student_id}/documents/{document_type}/{document_id}/reviews",
    response_model=List[ReviewRequestResponse]
)
def get_document_reviews(
    student_id: int,
    document_type: DocumentType,
    document_id: int,
    db: Session = Depends(get_db)
):
    """Get every review request for a document, newest first."""
    _require_student(db, student_id)
    reviews = review_service.list_document_reviews(
        db=db,
        student_id=student_id,
        document_id=document_id,
        document_type=document_type
    )
    return [ReviewRequestResponse(**r) for r in reviews]


# ======================
# ENROLLMENTS
# ======================
@router.get("/{student_id}/enrollments", response_model=List[EnrollmentResponse])
def get_enrollments(
    student_id: int,
    db: Session = Depends(get_db)
):
    """Get the student's (mentor, skill) enrollments with payment and progress flags."""
    _require_student(db, student_id)
    enrollments = review_service.list_student_enrollments(db, student_id)
    return [EnrollmentResponse(**e) for e in enrollments]
