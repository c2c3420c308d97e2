# app/services/eligibility.py
"""
Mentor Eligibility Engine
Pure functions over snapshot session records.

Pipeline:
- aggregate_enrollments: group a student's sessions by (mentor, skill)
- has_successful_payment: payment gate for one enrollment
- is_ongoing: completion classifier for one enrollment
- evaluate_enrollments: run the three stages and collect mentor candidates
- diagnose: explain an empty mentor list with a reason code

Nothing here touches the database; callers pass in session objects that
expose id, mentor_id, skill_name, status, payment, schedule_items and
(optionally) mentor.
"""

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from app.models.session import PaymentStatus, ScheduleStatus, SessionStatus

UNKNOWN_MENTOR_NAME = "Unknown Mentor"


class EligibilityReason(str, enum.Enum):
    NO_SESSIONS_FOUND = "NO_SESSIONS_FOUND"
    NO_PAID_ENROLLMENT = "NO_PAID_ENROLLMENT"
    ALL_ENROLLMENTS_COMPLETED = "ALL_ENROLLMENTS_COMPLETED"
    ALL_CANDIDATES_CLAIMED = "ALL_CANDIDATES_CLAIMED"


class EnrollmentKey(NamedTuple):
    mentor_id: int
    skill_name: str


@dataclass(frozen=True)
class SessionSummary:
    session_id: int
    status: SessionStatus
    has_payment: bool
    schedule_statuses: Tuple[ScheduleStatus, ...] = ()


@dataclass
class Enrollment:
    mentor_id: int
    mentor_name: str
    skill_name: str
    sessions: List[SessionSummary] = field(default_factory=list)

    @property
    def key(self) -> EnrollmentKey:
        return EnrollmentKey(self.mentor_id, self.skill_name)

    @property
    def schedule_statuses(self) -> List[ScheduleStatus]:
        return [status for s in self.sessions for status in s.schedule_statuses]


@dataclass(frozen=True)
class MentorCandidate:
    mentor_id: int
    mentor_name: str


@dataclass
class EnrollmentEvaluation:
    """Result of every pipeline stage, kept for diagnostics."""
    enrollments: Dict[EnrollmentKey, Enrollment]
    paid: List[Enrollment]
    ongoing: List[Enrollment]
    candidates: List[MentorCandidate]


# ======================
# ENROLLMENT AGGREGATOR
# ======================

def summarize_session(session) -> SessionSummary:
    payment = getattr(session, "payment", None)
    has_payment = payment is not None and payment.status == PaymentStatus.SUCCESS
    return SessionSummary(
        session_id=session.id,
        status=session.status,
        has_payment=has_payment,
        schedule_statuses=tuple(item.status for item in (session.schedule_items or [])),
    )


def _mentor_name(session) -> str:
    mentor = getattr(session, "mentor", None)
    if mentor is not None and mentor.name:
        return mentor.name
    return UNKNOWN_MENTOR_NAME


def aggregate_enrollments(sessions: Iterable) -> Dict[EnrollmentKey, Enrollment]:
    """
    Group sessions into enrollments keyed by (mentor_id, skill_name).

    Pure grouping; no session is filtered out here. Insertion order of the
    returned dict follows the first appearance of each key.
    """
    enrollments: Dict[EnrollmentKey, Enrollment] = {}
    for session in sessions:
        key = EnrollmentKey(session.mentor_id, session.skill_name)
        enrollment = enrollments.get(key)
        if enrollment is None:
            enrollment = Enrollment(
                mentor_id=session.mentor_id,
                mentor_name=_mentor_name(session),
                skill_name=session.skill_name,
            )
            enrollments[key] = enrollment
        enrollment.sessions.append(summarize_session(session))
    return enrollments


# ======================
# PAYMENT GATE
# ======================

def has_successful_payment(enrollment: Enrollment) -> bool:
    """One SUCCESS payment anywhere in the enrollment qualifies all of it."""
    return any(s.has_payment for s in enrollment.sessions)


# ======================
# COMPLETION CLASSIFIER
# ======================

def is_ongoing(enrollment: Enrollment) -> bool:
    """
    Schedule items are authoritative once any exist; otherwise fall back
    to the coarse session status. Mixed schedule items are always ongoing.
    """
    schedule_statuses = enrollment.schedule_statuses
    if schedule_statuses:
        all_completed = all(s == ScheduleStatus.COMPLETED for s in schedule_statuses)
    else:
        all_completed = all(s.status == SessionStatus.COMPLETED for s in enrollment.sessions)
    return not all_completed


# ======================
# COMPOSITION
# ======================

def collect_candidates(enrollments: Iterable[Enrollment]) -> List[MentorCandidate]:
    """Collapse enrollments to one candidate per mentor, first appearance wins."""
    seen: Dict[int, MentorCandidate] = {}
    for enrollment in enrollments:
        if enrollment.mentor_id not in seen:
            seen[enrollment.mentor_id] = MentorCandidate(
                mentor_id=enrollment.mentor_id,
                mentor_name=enrollment.mentor_name,
            )
    return list(seen.values())


def evaluate_enrollments(sessions: Iterable) -> EnrollmentEvaluation:
    enrollments = aggregate_enrollments(sessions)
    paid = [e for e in enrollments.values() if has_successful_payment(e)]
    ongoing = [e for e in paid if is_ongoing(e)]
    return EnrollmentEvaluation(
        enrollments=enrollments,
        paid=paid,
        ongoing=ongoing,
        candidates=collect_candidates(ongoing),
    )


def diagnose(
    evaluation: EnrollmentEvaluation,
    eligible: Sequence[MentorCandidate],
) -> Optional[EligibilityReason]:
    """Name the first stage that emptied the mentor list, or None."""
    if eligible:
        return None
    if not evaluation.enrollments:
        return EligibilityReason.NO_SESSIONS_FOUND
    if not evaluation.paid:
        return EligibilityReason.NO_PAID_ENROLLMENT
    if not evaluation.ongoing:
        return EligibilityReason.ALL_ENROLLMENTS_COMPLETED
    return EligibilityReason.ALL_CANDIDATES_CLAIMED
