"""
services/feedback_service.py
----------------------------
Business logic for reviewer feedback on submissions.
"""

from typing import Optional

from models.feedback import Feedback
from repositories.feedback_repo import FeedbackRepository
from security.auth import CallerIdentity
from utils.errors import ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


def _clean_comment(comment: Optional[str]) -> str:
    trimmed = (comment or "").strip()
    if not trimmed:
        raise ValidationError("Comment is required")
    return trimmed


class FeedbackService:
    """Handles all business logic related to feedback."""

    def __init__(self, repo: FeedbackRepository):
        self.repo = repo

    def list_for_submission(self, submission_id: int) -> list[Feedback]:
        return self.repo.list_for_submission(submission_id)

    def add(self, submission_id: int, comment: Optional[str], identity: CallerIdentity,
            requires_action: bool = False) -> Feedback:
        """
        Attach feedback to a submission, authored by the caller.

        Raises:
            ValidationError: If the comment is empty after trimming.
            NotFoundError: If the submission does not exist.
        """
        feedback = Feedback(
            submission_id=submission_id,
            author_id=identity.id,
            author_name=identity.name,
            comment=_clean_comment(comment),
            requires_action=bool(requires_action),
        )
        return self.repo.create(feedback)

    def edit(self, feedback_id: int, comment: Optional[str]) -> Feedback:
        return self.repo.update(feedback_id, _clean_comment(comment))

    def remove(self, feedback_id: int) -> None:
        self.repo.delete(feedback_id)
        logger.info(f"Deleted feedback #{feedback_id}")

    def mark_read(self, submission_id: int) -> int:
        return self.repo.mark_read(submission_id)
