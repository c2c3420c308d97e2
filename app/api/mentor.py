# app/api/mentor.py
"""
Mentor Review Inbox API Router

Endpoints:
- GET  /mentors/{mentor_id}/review-requests
- POST /mentors/{mentor_id}/review-requests/{request_id}/complete
- POST /mentors/{mentor_id}/review-requests/{request_id}/reject
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.api.review import to_http_exception
from app.crud import user as user_crud
from app.database import get_db
from app.exceptions import ReviewSharingError
from app.models.review import ReviewStatus
from app.models.user import UserRole
from app.schemas.review import (
    MentorReviewRequestResponse,
    ReviewCompleteRequest,
    ReviewRejectRequest,
    ReviewRequestResponse,
)
from app.services import review_service

router = APIRouter(prefix="/mentors", tags=["mentor-reviews"])


def _require_mentor(db: Session, mentor_id: int) -> None:
    if not user_crud.get_user_with_role(db, mentor_id, UserRole.MENTOR):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "MENTOR_NOT_FOUND", "message": "Mentor not found"}
        )


@router.get("/{mentor_id}/review-requests", response_model=List[MentorReviewRequestResponse])
def get_review_requests(
    mentor_id: int,
    status_filter: Optional[ReviewStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    """Documents shared with this mentor, newest first."""
    _require_mentor(db, mentor_id)
    requests = review_service.list_mentor_review_requests(
        db=db,
        mentor_id=mentor_id,
        status=status_filter,
        limit=limit,
        offset=offset
    )
    return [MentorReviewRequestResponse(**r) for r in requests]


@router.post("/{mentor_id}/review-requests/{request_id}/complete", response_model=ReviewRequestResponse)
def complete_review(
    mentor_id: int,
    request_id: int,
    body: ReviewCompleteRequest,
    db: Session = Depends(get_db)
):
    """Verify a pending review with a 1-5 rating and optional feedback."""
    _require_mentor(db, mentor_id)
    try:
        request = review_service.complete_review(
            db=db,
            mentor_id=mentor_id,
            request_id=request_id,
            rating=body.rating,
            feedback=body.feedback
        )
    except ReviewSharingError as e:
        raise to_http_exception(e)

    return ReviewRequestResponse(**review_service.format_review_request(request))


@router.post("/{mentor_id}/review-requests/{request_id}/reject", response_model=ReviewRequestResponse)
def reject_review(
    mentor_id: int,
    request_id: int,
    body: ReviewRejectRequest,
    db: Session = Depends(get_db)
):
    """Decline a pending review; the document stays claimed."""
    _require_mentor(db, mentor_id)
    try:
        request = review_service.reject_review(
            db=db,
            mentor_id=mentor_id,
            request_id=request_id,
            feedback=body.feedback
        )
    except ReviewSharingError as e:
        raise to_http_exception(e)

    return ReviewRequestResponse(**review_service.format_review_request(request))
