from typing import List

from pydantic import Field

from app.schemas.review import CamelModel


class EnrollmentResponse(CamelModel):
    """A student's derived (mentor, skill) enrollment"""
    mentor_id: int
    mentor_name: str
    skill_name: str
    session_ids: List[int] = Field(default_factory=list)
    has_payment: bool = Field(..., description="At least one session paid successfully")
    is_ongoing: bool = Field(..., description="Not every session or schedule item is completed")
