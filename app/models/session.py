# app/models/session.py
import enum

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, TIMESTAMP, Enum, func
from sqlalchemy.orm import relationship
from app.database import Base


class SessionStatus(str, enum.Enum):
    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class ScheduleStatus(str, enum.Enum):
    LOCKED = "LOCKED"
    UPCOMING = "UPCOMING"
    COMPLETED = "COMPLETED"


# Sessions in these states never form part of an enrollment
INACTIVE_SESSION_STATUSES = (SessionStatus.CANCELLED, SessionStatus.REJECTED)


class Session(Base):
    __tablename__ = "sessions"
    
    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    mentor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Snapshot of the skill title at booking time, not a live catalog join
    skill_name = Column(String(100), nullable=False)
    status = Column(Enum(SessionStatus), default=SessionStatus.PENDING, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, onupdate=func.now())

    # Relationships
    student = relationship("User", foreign_keys=[student_id], back_populates="student_sessions")
    mentor = relationship("User", foreign_keys=[mentor_id], back_populates="mentor_sessions")
    payment = relationship("Payment", back_populates="session", uselist=False, cascade="all, delete-orphan")
    schedule_items = relationship(
        "ScheduleItem",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by=lambda: [ScheduleItem.position, ScheduleItem.id],
    )


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), unique=True, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, onupdate=func.now())

    session = relationship("Session", back_populates="payment")


class ScheduleItem(Base):
    __tablename__ = "session_schedule"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    title = Column(String(200))
    scheduled_date = Column(TIMESTAMP)
    status = Column(Enum(ScheduleStatus), default=ScheduleStatus.LOCKED, nullable=False)

    session = relationship("Session", back_populates="schedule_items")
