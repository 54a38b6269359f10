"""
services/portal_service.py
--------------------------
The creator-facing side of influencer applications: approved creators
browse open briefs and follow their own submissions by email.
"""

from typing import Optional

from models.brief import Brief
from models.influencer import InfluencerApplication
from models.submission import Submission
from repositories.brief_repo import BriefRepository
from repositories.influencer_repo import InfluencerRepository
from repositories.submission_repo import SubmissionRepository
from utils.errors import ForbiddenError, NotFoundError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

UNDER_REVIEW_MESSAGE = "Access denied. Your application is still under review."


def _require_email(email: Optional[str]) -> str:
    email = (email or "").strip()
    if not email:
        raise ValidationError("Email is required")
    return email


class PortalService:
    """Read-only views for creators, keyed by the email they applied with."""

    def __init__(self, influencers: InfluencerRepository, briefs: BriefRepository,
                 submissions: SubmissionRepository):
        self.influencers = influencers
        self.briefs = briefs
        self.submissions = submissions

    def open_portal(self, email: Optional[str]) -> tuple[InfluencerApplication, list[Brief]]:
        """
        The creator's application and every published brief.

        Raises:
            ValidationError: If no email is given.
            NotFoundError: If nobody applied with this email.
            ForbiddenError: If the application is not approved.
        """
        application = self.influencers.get_by_email(_require_email(email))
        if application is None:
            raise NotFoundError("Influencer not found")
        if application.status != "approved":
            logger.info(f"Portal refused for influencer #{application.id} ({application.status})")
            raise ForbiddenError(UNDER_REVIEW_MESSAGE)
        return application, self.briefs.list_all_with_counts("PUBLISHED")

    def creator_submissions(self, email: Optional[str],
                            brief_id: Optional[int] = None) -> list[Submission]:
        """Submissions sent under ``email``, newest first, optionally for one brief."""
        return self.submissions.list_for_creator(_require_email(email), brief_id)
