"""
services/influencer_service.py
------------------------------
Business logic for influencer applications: intake validation and the
admin review workflow.
"""

from typing import Any, Mapping, Optional

from models.influencer import APPLICATION_STATUSES, InfluencerApplication
from repositories.influencer_repo import InfluencerRepository
from utils.errors import NotFoundError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("email", "firstName", "lastName", "instagramHandle")
LIST_FILTERS = APPLICATION_STATUSES + ("all",)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class InfluencerService:
    """
    Handles all business logic related to influencer applications.

    Applications start as 'pending'. Any status may move to any other;
    reversing a decision is allowed but logged.
    """

    def __init__(self, repo: InfluencerRepository):
        self.repo = repo

    def apply(self, payload: Mapping[str, Any]) -> InfluencerApplication:
        """
        File a new application.

        Raises:
            ValidationError: If a required field is missing or blank.
            ConflictError: If an application with this email exists.
        """
        values = {key: _blank_to_none(value) for key, value in payload.items()}
        missing = [field for field in REQUIRED_FIELDS if not values.get(field)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        application = InfluencerApplication(
            first_name=values["firstName"],
            last_name=values["lastName"],
            email=values["email"],
            instagram_handle=values["instagramHandle"],
            phone=values.get("phone"),
            instagram_followers=values.get("instagramFollowers"),
            tiktok_handle=values.get("tiktokHandle"),
            youtube_channel=values.get("youtubeChannel"),
        )
        return self.repo.create(application)

    def list_applications(self, status: Optional[str] = None) -> list[InfluencerApplication]:
        """
        Applications with the given status ('pending' when omitted), or all
        of them for 'all'.
        """
        status = status or "pending"
        if status not in LIST_FILTERS:
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(LIST_FILTERS)}"
            )
        return self.repo.list_by_status(status)

    def update_status(self, influencer_id: Optional[int], status: Optional[str],
                      notes: Optional[str] = None) -> InfluencerApplication:
        """
        Approve, reject or reset an application.

        Raises:
            ValidationError: If the id or status is missing, or the status is unknown.
            NotFoundError: If no application has this id.
        """
        if influencer_id is None or not status:
            raise ValidationError("Missing influencerId or status")
        if status not in APPLICATION_STATUSES:
            raise ValidationError("Invalid status. Must be 'approved', 'rejected', or 'pending'")

        current = self.repo.get_by_id(influencer_id)
        if current is None:
            raise NotFoundError("Influencer not found")
        if current.is_decided() and current.status != status:
            logger.warning(
                f"Influencer #{influencer_id} moved from {current.status} to {status}"
            )
        return self.repo.update_status(influencer_id, status, notes)
