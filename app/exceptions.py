# app/exceptions.py
class ReviewSharingError(Exception):
    """Base exception for review-sharing business rule violations"""
    code = "REVIEW_SHARING_ERROR"


class AlreadyClaimedError(ReviewSharingError):
    """Raised when the document already has a review request with some mentor"""
    code = "ALREADY_CLAIMED"


class NotEligibleError(ReviewSharingError):
    """Raised when the chosen mentor is not in the student's eligible set"""
    code = "NOT_ELIGIBLE"


class ReviewNotFoundError(ReviewSharingError):
    """Raised when a review request does not exist for the acting mentor"""
    code = "REVIEW_NOT_FOUND"


class InvalidReviewStateError(ReviewSharingError):
    """Raised when a review request is no longer PENDING"""
    code = "INVALID_REVIEW_STATE"


class InvalidRatingError(ReviewSharingError):
    """Raised when a verification is submitted without a 1-5 rating"""
    code = "INVALID_RATING"
