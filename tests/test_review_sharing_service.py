# tests/test_review_sharing_service.py
"""
Review sharing service tests against an in-memory SQLite database:
eligibility resolution, the share transaction and the mentor decisions.
"""

import pytest

from app.exceptions import (
    AlreadyClaimedError,
    InvalidRatingError,
    InvalidReviewStateError,
    NotEligibleError,
    ReviewNotFoundError,
)
from app.models import (
    DocumentType,
    Notification,
    PaymentStatus,
    ReviewRequest,
    ReviewStatus,
    ScheduleStatus,
    SessionStatus,
)
from app.services import review_service

RESUME = DocumentType.RESUME
COVER_LETTER = DocumentType.COVER_LETTER


def _resolve(db, student, document_id=1, document_type=RESUME):
    return review_service.resolve_eligible_mentors(db, student.id, document_id, document_type)


def _mentor_ids(result):
    return [m["mentor_id"] for m in result["mentors"]]


# ======================
# SCENARIOS
# ======================

def test_scenario_a_paid_scheduled_session_is_eligible(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)

    result = _resolve(db_session, people["student"])

    assert result["mentors"] == [{"mentor_id": people["m1"].id, "mentor_name": "Mentor One"}]
    assert result["has_active_review"] is False
    assert result["pending_review_mentor"] is None
    assert result["reason"] is None


def test_scenario_b_completed_session_without_schedule(db_session, people, make_session):
    make_session(
        student=people["student"],
        mentor=people["m1"],
        status=SessionStatus.COMPLETED,
        payment=PaymentStatus.SUCCESS,
    )

    result = _resolve(db_session, people["student"])

    assert result["mentors"] == []
    assert result["reason"] == "ALL_ENROLLMENTS_COMPLETED"


def test_scenario_c_completed_schedule_outweighs_scheduled_sibling(db_session, people, make_session):
    make_session(
        student=people["student"],
        mentor=people["m1"],
        status=SessionStatus.COMPLETED,
        payment=PaymentStatus.SUCCESS,
        schedule=[ScheduleStatus.COMPLETED] * 3,
    )
    make_session(student=people["student"], mentor=people["m1"], status=SessionStatus.SCHEDULED)

    result = _resolve(db_session, people["student"])

    assert result["mentors"] == []
    assert result["reason"] == "ALL_ENROLLMENTS_COMPLETED"


def test_scenario_d_shared_mentor_becomes_pending(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)

    review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m1"].id)
    result = _resolve(db_session, people["student"])

    assert result["mentors"] == []
    assert result["has_active_review"] is True
    assert result["pending_review_mentor"]["mentor_id"] == people["m1"].id
    assert result["pending_review_mentor"]["mentor_name"] == "Mentor One"
    assert result["reason"] == "ALL_CANDIDATES_CLAIMED"


# ======================
# RESOLVER BEHAVIOUR
# ======================

def test_cancelled_and_rejected_sessions_are_ignored(db_session, people, make_session):
    make_session(
        student=people["student"], mentor=people["m1"],
        status=SessionStatus.CANCELLED, payment=PaymentStatus.SUCCESS,
    )
    make_session(
        student=people["student"], mentor=people["m2"],
        status=SessionStatus.REJECTED, payment=PaymentStatus.SUCCESS,
    )

    result = _resolve(db_session, people["student"])

    assert result["mentors"] == []
    assert result["reason"] == "NO_SESSIONS_FOUND"


def test_unpaid_enrollment_reason(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.PENDING)
    make_session(student=people["student"], mentor=people["m2"])

    result = _resolve(db_session, people["student"])

    assert result["mentors"] == []
    assert result["reason"] == "NO_PAID_ENROLLMENT"


def test_one_paid_session_qualifies_the_whole_enrollment(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.FAILED)
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)

    assert _mentor_ids(_resolve(db_session, people["student"])) == [people["m1"].id]


def test_mentor_with_two_skills_appears_once(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m2"], skill_name="Go", payment=PaymentStatus.SUCCESS)
    make_session(student=people["student"], mentor=people["m1"], skill_name="React", payment=PaymentStatus.SUCCESS)
    make_session(student=people["student"], mentor=people["m2"], skill_name="Rust", payment=PaymentStatus.SUCCESS)

    result = _resolve(db_session, people["student"])

    assert _mentor_ids(result) == [people["m2"].id, people["m1"].id]


def test_resolution_is_repeatable(db_session, people, make_session):
    for mentor in (people["m3"], people["m1"], people["m2"]):
        make_session(student=people["student"], mentor=mentor, payment=PaymentStatus.SUCCESS)

    first = _resolve(db_session, people["student"])
    second = _resolve(db_session, people["student"])

    assert first == second
    assert _mentor_ids(first) == [people["m3"].id, people["m1"].id, people["m2"].id]


def test_claims_are_scoped_per_document(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)

    review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m1"].id)

    other_resume = _resolve(db_session, people["student"], document_id=2)
    same_id_cover_letter = _resolve(db_session, people["student"], document_id=1, document_type=COVER_LETTER)
    assert _mentor_ids(other_resume) == [people["m1"].id]
    assert _mentor_ids(same_id_cover_letter) == [people["m1"].id]


def test_verified_review_still_claims_mentor(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)
    request = review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m1"].id)
    review_service.complete_review(db_session, people["m1"].id, request.id, rating=4, feedback="Solid")

    result = _resolve(db_session, people["student"])

    assert result["mentors"] == []
    assert result["has_active_review"] is False
    assert result["pending_review_mentor"] is None
    assert result["reason"] == "ALL_CANDIDATES_CLAIMED"


@pytest.mark.parametrize("decision", [None, "complete", "reject"])
def test_claimed_document_offers_no_other_mentor(db_session, people, make_session, decision):
    student, m1, m2 = people["student"], people["m1"], people["m2"]
    make_session(student=student, mentor=m1, payment=PaymentStatus.SUCCESS)
    make_session(student=student, mentor=m2, payment=PaymentStatus.SUCCESS)
    request = review_service.share_document(db_session, student.id, 1, RESUME, m1.id)
    if decision == "complete":
        review_service.complete_review(db_session, m1.id, request.id, rating=5)
    elif decision == "reject":
        review_service.reject_review(db_session, m1.id, request.id)

    result = _resolve(db_session, student)

    assert result["mentors"] == []
    assert result["reason"] == "ALL_CANDIDATES_CLAIMED"
    assert result["has_active_review"] is (decision is None)
    if decision is None:
        assert result["pending_review_mentor"]["mentor_id"] == m1.id
    else:
        assert result["pending_review_mentor"] is None
    with pytest.raises(AlreadyClaimedError):
        review_service.share_document(db_session, student.id, 1, RESUME, m2.id)


def test_claimed_document_with_finished_enrollments_reports_first_failing_stage(
    db_session, people, make_session
):
    session = make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)
    review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m1"].id)
    session.status = SessionStatus.COMPLETED
    db_session.commit()

    result = _resolve(db_session, people["student"])

    assert result["mentors"] == []
    assert result["has_active_review"] is True
    assert result["reason"] == "ALL_ENROLLMENTS_COMPLETED"


# ======================
# SHARE TRANSACTION
# ======================

def test_share_creates_pending_request_and_notifies_mentor(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)

    request = review_service.share_document(
        db_session, people["student"].id, 7, COVER_LETTER, people["m1"].id
    )

    assert request.id is not None
    assert request.status == ReviewStatus.PENDING
    assert request.document_type == COVER_LETTER
    assert request.rating is None

    notification = db_session.query(Notification).filter(
        Notification.recipient_id == people["m1"].id
    ).one()
    assert notification.event_type == "review_requested"
    assert notification.review_request_id == request.id


def test_second_share_fails_with_already_claimed(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)
    make_session(student=people["student"], mentor=people["m2"], payment=PaymentStatus.SUCCESS)
    review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m1"].id)

    with pytest.raises(AlreadyClaimedError):
        review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m2"].id)
    with pytest.raises(AlreadyClaimedError):
        review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m1"].id)

    assert db_session.query(ReviewRequest).count() == 1


def test_rejected_review_keeps_document_claimed(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)
    make_session(student=people["student"], mentor=people["m2"], payment=PaymentStatus.SUCCESS)
    request = review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m1"].id)
    review_service.reject_review(db_session, people["m1"].id, request.id, feedback="Too busy")

    with pytest.raises(AlreadyClaimedError):
        review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m2"].id)


def test_share_with_ineligible_mentor_fails(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)
    make_session(student=people["student"], mentor=people["m2"], payment=PaymentStatus.PENDING)

    with pytest.raises(NotEligibleError):
        review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m2"].id)
    with pytest.raises(NotEligibleError):
        review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m3"].id)

    assert db_session.query(ReviewRequest).count() == 0
    assert db_session.query(Notification).count() == 0


def test_share_rechecks_eligibility_at_write_time(db_session, people, make_session):
    session = make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)
    assert _mentor_ids(_resolve(db_session, people["student"])) == [people["m1"].id]

    # Enrollment cancelled between the read and the share
    session.status = SessionStatus.CANCELLED
    db_session.commit()

    with pytest.raises(NotEligibleError):
        review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m1"].id)
    assert db_session.query(ReviewRequest).count() == 0


# ======================
# MENTOR DECISIONS
# ======================

@pytest.fixture
def pending_request(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)
    return review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m1"].id)


def test_complete_review_sets_rating_and_notifies_student(db_session, people, pending_request):
    request = review_service.complete_review(
        db_session, people["m1"].id, pending_request.id, rating=5, feedback="Great structure"
    )

    assert request.status == ReviewStatus.VERIFIED
    assert request.rating == 5
    assert request.feedback == "Great structure"
    assert request.reviewed_at is not None

    events = [
        n.event_type
        for n in db_session.query(Notification).filter(Notification.recipient_id == people["student"].id)
    ]
    assert events == ["review_completed"]


@pytest.mark.parametrize("rating", [None, 0, 6])
def test_complete_review_requires_valid_rating(db_session, people, pending_request, rating):
    with pytest.raises(InvalidRatingError):
        review_service.complete_review(db_session, people["m1"].id, pending_request.id, rating=rating)

    db_session.refresh(pending_request)
    assert pending_request.status == ReviewStatus.PENDING


def test_complete_review_by_other_mentor_is_not_found(db_session, people, pending_request):
    with pytest.raises(ReviewNotFoundError):
        review_service.complete_review(db_session, people["m2"].id, pending_request.id, rating=3)


def test_review_cannot_be_decided_twice(db_session, people, pending_request):
    review_service.complete_review(db_session, people["m1"].id, pending_request.id, rating=3)

    with pytest.raises(InvalidReviewStateError):
        review_service.complete_review(db_session, people["m1"].id, pending_request.id, rating=4)
    with pytest.raises(InvalidReviewStateError):
        review_service.reject_review(db_session, people["m1"].id, pending_request.id)


def test_reject_review(db_session, people, pending_request):
    request = review_service.reject_review(db_session, people["m1"].id, pending_request.id, feedback="Busy")

    assert request.status == ReviewStatus.REJECTED
    assert request.rating is None
    assert request.reviewed_at is not None


# ======================
# LISTINGS
# ======================

def test_document_reviews_and_mentor_inbox(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], payment=PaymentStatus.SUCCESS)
    resume = review_service.share_document(db_session, people["student"].id, 1, RESUME, people["m1"].id)
    letter = review_service.share_document(db_session, people["student"].id, 1, COVER_LETTER, people["m1"].id)
    review_service.complete_review(db_session, people["m1"].id, resume.id, rating=4)

    reviews = review_service.list_document_reviews(db_session, people["student"].id, 1, RESUME)
    assert len(reviews) == 1
    assert reviews[0]["status"] == ReviewStatus.VERIFIED
    assert reviews[0]["mentor_name"] == "Mentor One"
    assert reviews[0]["rating"] == 4

    inbox = review_service.list_mentor_review_requests(db_session, people["m1"].id)
    assert {r["id"] for r in inbox} == {resume.id, letter.id}
    assert all(r["student_name"] == "Student One" for r in inbox)

    pending = review_service.list_mentor_review_requests(db_session, people["m1"].id, status=ReviewStatus.PENDING)
    assert [r["id"] for r in pending] == [letter.id]


def test_student_enrollments_view(db_session, people, make_session):
    make_session(student=people["student"], mentor=people["m1"], skill_name="React", payment=PaymentStatus.SUCCESS)
    make_session(
        student=people["student"], mentor=people["m1"], skill_name="SQL",
        status=SessionStatus.COMPLETED, payment=PaymentStatus.SUCCESS,
    )
    make_session(student=people["student"], mentor=people["m2"], skill_name="React")

    enrollments = review_service.list_student_enrollments(db_session, people["student"].id)

    assert [(e["mentor_id"], e["skill_name"], e["has_payment"], e["is_ongoing"]) for e in enrollments] == [
        (people["m1"].id, "React", True, True),
        (people["m1"].id, "SQL", True, False),
        (people["m2"].id, "React", False, True),
    ]
