import logging
from typing import Iterable, List, Optional, Set

from app.models.review import ReviewRequest, ReviewStatus

logger = logging.getLogger(__name__)


class ReviewLedger:
    """Every review request ever created for one (document, student) key."""

    def __init__(self, requests: Iterable[ReviewRequest]):
        self.requests: List[ReviewRequest] = list(requests)

    @property
    def is_claimed(self) -> bool:
        return bool(self.requests)

    @property
    def claimed_mentor_ids(self) -> Set[int]:
        # Any status counts: a verified or rejected review still claims the document
        return {r.mentor_id for r in self.requests}

    @property
    def active_review(self) -> Optional[ReviewRequest]:
        pending = [r for r in self.requests if r.status == ReviewStatus.PENDING]
        if len(pending) > 1:
            logger.warning(
                "Multiple pending review requests for document_id=%s (ids=%s)",
                pending[0].document_id,
                [r.id for r in pending],
            )
        return pending[0] if pending else None
