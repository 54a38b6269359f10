"""
models/submission.py
--------------------
Domain model for creator submissions against a brief.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from models.brief import Reward

SUBMISSION_STATUSES = ("RECEIVED", "IN_REVIEW", "SELECTED", "NOT_SELECTED")
PAYOUT_STATUSES = ("NOT_APPLICABLE", "PENDING", "PAID")


@dataclass
class BriefSummary:
    """The slice of the parent brief shown next to each submission."""
    id: int
    slug: Optional[str] = None
    title: Optional[str] = None
    org_name: Optional[str] = None
    organization_name: Optional[str] = None
    reward: Reward = field(default_factory=Reward)


@dataclass
class Creator:
    """Who submitted the video, resolved from the linked user when present."""
    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    handle: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@dataclass
class Video:
    url: Optional[str] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    size_bytes: Optional[int] = None


@dataclass
class Submission:
    """
    Represents one video entry.

    Attributes:
        brief_id: Parent brief.
        creator: Resolved creator identity.
        video: Uploaded video metadata.
        status: 'RECEIVED' | 'IN_REVIEW' | 'SELECTED' | 'NOT_SELECTED'.
        payout_status: 'NOT_APPLICABLE' | 'PENDING' | 'PAID'.
        parent_submission_id: Root of the resubmission chain (None for the root).
        submission_version: 1 for the original, +1 per resubmission.
        has_feedback: Whether any feedback row exists.
        brief: Parent brief summary (only on listing paths).
    """
    brief_id: int
    id: Optional[int] = None
    creator: Creator = field(default_factory=Creator)
    creator_phone: Optional[str] = None
    creator_betting_account: Optional[str] = None
    message: Optional[str] = None
    video: Video = field(default_factory=Video)
    status: str = "RECEIVED"
    feedback: Optional[str] = None
    payout_status: str = "NOT_APPLICABLE"
    payout_amount: Optional[float] = None
    payout_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    review_notes: Optional[str] = None
    selected_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    parent_submission_id: Optional[int] = None
    submission_version: int = 1
    allows_resubmission: bool = False
    has_feedback: bool = False
    brief: Optional[BriefSummary] = None

    @property
    def root_id(self) -> Optional[int]:
        """Id of the first submission in this resubmission chain."""
        return self.parent_submission_id or self.id
