# app/schemas/__init__.py

from .review import (
    EligibleMentor,
    EligibleMentorsResponse,
    ShareDocumentRequest,
    ReviewRequestResponse,
    MentorReviewRequestResponse,
    ReviewCompleteRequest,
    ReviewRejectRequest,
)
from .enrollment import EnrollmentResponse

__all__ = [
    "EligibleMentor",
    "EligibleMentorsResponse",
    "ShareDocumentRequest",
    "ReviewRequestResponse",
    "MentorReviewRequestResponse",
    "ReviewCompleteRequest",
    "ReviewRejectRequest",
    "EnrollmentResponse",
]
