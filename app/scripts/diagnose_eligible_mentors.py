"""
Explain why a student's document does or does not have eligible mentors.

Usage:
  python -m app.scripts.diagnose_eligible_mentors <student_id> <RESUME|COVER_LETTER> <document_id>
"""

import argparse
from typing import List, Optional

from sqlalchemy.orm import Session

from app.crud import session as session_crud
from app.crud import user as user_crud
from app.database import SessionLocal
from app.models.review import DocumentType
from app.services import eligibility, review_service


def _section(title: str) -> None:
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def diagnose(db: Session, student_id: int, document_type: DocumentType, document_id: int) -> int:
    student = user_crud.get_user(db, student_id)
    print(f"Student: {student.name if student else 'NOT FOUND'} ({student_id})")
    print(f"Document: {document_type.value} {document_id}")

    _section("STEP 1: Sessions (excluding CANCELLED/REJECTED)")
    sessions = session_crud.get_active_sessions_for_student(db, student_id)
    print(f"Total sessions found: {len(sessions)}")
    for s in sessions:
        payment = s.payment.status.value if s.payment else "NONE"
        schedule = [item.status.value for item in s.schedule_items]
        print(
            f"  session={s.id} mentor={s.mentor_id} skill={s.skill_name!r} "
            f"status={s.status.value} payment={payment} schedule={schedule}"
        )

    result = review_service.evaluate_document(db, student_id, document_id, document_type)

    _section("STEP 2: Enrollments (mentor, skill)")
    for key, enrollment in result.evaluation.enrollments.items():
        paid = eligibility.has_successful_payment(enrollment)
        ongoing = eligibility.is_ongoing(enrollment)
        verdict = "ONGOING" if paid and ongoing else ("NO PAYMENT" if not paid else "COMPLETED")
        print(
            f"  {enrollment.mentor_name} ({key.mentor_id}) / {key.skill_name!r}: "
            f"sessions={len(enrollment.sessions)} "
            f"schedule_items={len(enrollment.schedule_statuses)} "
            f"paid={paid} ongoing={ongoing} -> {verdict}"
        )
    print(f"Candidates: {[c.mentor_id for c in result.evaluation.candidates]}")

    _section("STEP 3: Review ledger")
    ledger = result.ledger
    for r in ledger.requests:
        print(f"  request={r.id} mentor={r.mentor_id} status={r.status.value}")
    if not ledger.requests:
        print("  No review requests for this document")
    active = ledger.active_review
    print(f"  Claimed by: {sorted(ledger.claimed_mentor_ids) or 'nobody'}")
    print(f"  Active (PENDING) review: {active.mentor_id if active else 'none'}")

    _section("STEP 4: Eligible mentors")
    print(f"Eligible: {len(result.mentors)}")
    for m in result.mentors:
        print(f"  - {m.mentor_name} ({m.mentor_id})")

    reason = result.reason
    if reason:
        print(f"\nNo eligible mentors: {reason.value}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("student_id", type=int)
    parser.add_argument("document_type", type=DocumentType, choices=list(DocumentType))
    parser.add_argument("document_id", type=int)
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        return diagnose(db, args.student_id, args.document_type, args.document_id)
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
