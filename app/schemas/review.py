# app/schemas/review.py
"""
Review Sharing Pydantic Schemas
Request/response models; JSON field names are camelCase
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime

from app.models.review import DocumentType, ReviewStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _strip_feedback(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


# ======================
# ELIGIBILITY SCHEMAS
# ======================

class EligibleMentor(CamelModel):
    mentor_id: int = Field(..., description="Mentor user ID")
    mentor_name: str = Field(..., description="Mentor display name")


class EligibleMentorsResponse(CamelModel):
    """Mentors a document may currently be shared with"""
    mentors: List[EligibleMentor] = Field(default_factory=list)
    has_active_review: bool = Field(False, description="Whether a PENDING review exists")
    pending_review_mentor: Optional[EligibleMentor] = Field(
        None, description="Mentor holding the pending review, if any"
    )
    reason: Optional[str] = Field(
        None, description="Why the mentor list is empty (null when it is not)"
    )


# ======================
# SHARE SCHEMAS
# ======================

class ShareDocumentRequest(CamelModel):
    mentor_id: int = Field(..., description="Mentor to share the document with")


class ReviewRequestResponse(CamelModel):
    """Review request as seen by the student"""
    id: int
    document_id: int
    document_type: DocumentType
    student_id: int
    mentor_id: int
    mentor_name: Optional[str] = None
    status: ReviewStatus
    rating: Optional[int] = None
    feedback: Optional[str] = None
    created_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None


class MentorReviewRequestResponse(ReviewRequestResponse):
    """Review request as seen by the assigned mentor"""
    student_name: Optional[str] = None


# ======================
# MENTOR DECISION SCHEMAS
# ======================

class ReviewCompleteRequest(CamelModel):
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5 stars")
    feedback: Optional[str] = Field(None, max_length=5000, description="Mentor feedback")

    @field_validator("feedback")
    @classmethod
    def strip_feedback(cls, v):
        return _strip_feedback(v)


class ReviewRejectRequest(CamelModel):
    feedback: Optional[str] = Field(None, max_length=5000, description="Reason for declining")

    @field_validator("feedback")
    @classmethod
    def strip_feedback(cls, v):
        return _strip_feedback(v)
