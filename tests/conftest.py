"""Pytest bootstrap for project imports and shared fixtures."""

import os
from pathlib import Path
import sys

# Settings are read at import time; tests never touch a real database or SMTP relay
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("EMAIL_NOTIFICATIONS_ENABLED", "false")
os.environ.setdefault("APP_ENV", "test")

# Ensure project root is on sys.path so `import app` works
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.database import Base
from app.models import (
    Payment,
    PaymentStatus,
    ScheduleItem,
    Session,
    SessionStatus,
    User,
    UserRole,
)


@pytest.fixture
def db_session():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


def create_user(db, *, name: str, email: str, role: UserRole = UserRole.STUDENT) -> User:
    user = User(name=name, email=email, role=role.value, is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_session(
    db,
    *,
    student: User,
    mentor: User,
    skill_name: str = "React",
    status: SessionStatus = SessionStatus.SCHEDULED,
    payment: PaymentStatus = None,
    schedule=(),
) -> Session:
    session = Session(
        student_id=student.id,
        mentor_id=mentor.id,
        skill_name=skill_name,
        status=status,
    )
    if payment is not None:
        session.payment = Payment(amount=499, status=payment)
    session.schedule_items = [
        ScheduleItem(position=i, title=f"Week {i + 1}", status=item_status)
        for i, item_status in enumerate(schedule)
    ]
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


@pytest.fixture
def people(db_session):
    """One student and three mentors."""
    return {
        "student": create_user(db_session, name="Student One", email="student1@test.edu"),
        "m1": create_user(db_session, name="Mentor One", email="m1@test.edu", role=UserRole.MENTOR),
        "m2": create_user(db_session, name="Mentor Two", email="m2@test.edu", role=UserRole.MENTOR),
        "m3": create_user(db_session, name="Mentor Three", email="m3@test.edu", role=UserRole.MENTOR),
    }


@pytest.fixture
def make_session(db_session):
    def _make(**kwargs):
        return create_session(db_session, **kwargs)
    return _make
