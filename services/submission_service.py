"""
services/submission_service.py
------------------------------
Business logic for submissions: listing per brief, review decisions,
payout tracking and resubmission history.
"""

from typing import Optional

from models.submission import PAYOUT_STATUSES, SUBMISSION_STATUSES, Submission
from repositories.submission_repo import SubmissionRepository
from security.auth import CallerIdentity
from utils.errors import NotFoundError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


class SubmissionService:
    """Handles all business logic related to submissions."""

    def __init__(self, repo: SubmissionRepository):
        self.repo = repo

    def list_for_brief(self, brief_id: int) -> list[Submission]:
        """
        Submissions for a brief, newest first, each with the creator's
        display name and brief summary resolved.

        Raises:
            NotFoundError: If the brief does not exist.
        """
        submissions = self.repo.list_for_brief(brief_id)
        logger.info(f"Found {len(submissions)} submissions for brief {brief_id}")
        return submissions

    def get(self, submission_id: int) -> Submission:
        submission = self.repo.get_by_id(submission_id)
        if submission is None:
            raise NotFoundError("Submission not found")
        return submission

    def history(self, submission_id: int) -> list[Submission]:
        """
        Every version in the resubmission chain containing a submission,
        oldest first.

        Raises:
            NotFoundError: If the submission does not exist.
        """
        submission = self.get(submission_id)
        return self.repo.list_chain(submission.root_id)

    def review(
        self,
        submission_id: int,
        status: Optional[str],
        identity: CallerIdentity,
        allows_resubmission: Optional[bool] = None,
        review_notes: Optional[str] = None,
    ) -> Submission:
        """
        Record a review decision on behalf of the caller.

        Raises:
            ValidationError: If the status is missing or unknown.
            NotFoundError: If the submission does not exist.
        """
        if not status:
            raise ValidationError("Status is required")
        if status not in SUBMISSION_STATUSES:
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(SUBMISSION_STATUSES)}"
            )
        return self.repo.update_status(
            submission_id,
            status,
            allows_resubmission=allows_resubmission,
            review_notes=review_notes,
            reviewed_by=identity.id,
        )

    def update_payout(self, submission_id: int, payout_status: Optional[str],
                      notes: Optional[str] = None) -> Submission:
        if not payout_status:
            raise ValidationError("Payout status is required")
        if payout_status not in PAYOUT_STATUSES:
            raise ValidationError(
                f"Invalid payout status. Must be one of: {', '.join(PAYOUT_STATUSES)}"
            )
        return self.repo.update_payout(submission_id, payout_status, notes)
