# app/models/review.py
import enum

from sqlalchemy import (
    Column, Integer, Text, ForeignKey, TIMESTAMP, Enum, func,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from app.database import Base


class DocumentType(str, enum.Enum):
    RESUME = "RESUME"
    COVER_LETTER = "COVER_LETTER"


DOCUMENT_LABELS = {
    DocumentType.RESUME: "resume",
    DocumentType.COVER_LETTER: "cover letter",
}


class ReviewStatus(str, enum.Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class ReviewRequest(Base):
    __tablename__ = "review_requests"
    
    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, nullable=False, index=True)
    document_type = Column(Enum(DocumentType), nullable=False)
    student_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    mentor_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Enum(ReviewStatus), default=ReviewStatus.PENDING, nullable=False)
    rating = Column(Integer)
    feedback = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())
    reviewed_at = Column(TIMESTAMP)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    # One document can only ever be claimed by one mentor
    __table_args__ = (
        UniqueConstraint("document_id", "document_type", "student_id", name="uq_review_request_document"),
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="check_review_rating_range"),
    )
    
    # Relationships
    student = relationship("User", foreign_keys=[student_id])
    mentor = relationship("User", foreign_keys=[mentor_id])
