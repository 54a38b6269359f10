"""
services/brief_service.py
-------------------------
Business logic for briefs: required fields, defaults and the slug
collision policy. Orchestrates the BriefRepository.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

from config import BRIEF_DEFAULT_DEADLINE_DAYS
from models.brief import BRIEF_STATUSES, REWARD_TYPES, Brief
from repositories.brief_repo import BriefRepository
from repositories.row_mapper import brief_from_payload
from security.auth import CallerIdentity
from utils.errors import ConflictError, NotFoundError, ValidationError
from utils.logger import get_logger
from utils.slug import disambiguate_slug, generate_slug

logger = get_logger(__name__)

DEFAULT_DELIVERABLE_RATIO = "9:16"
DEFAULT_DELIVERABLE_LENGTH = "15-30 seconds"
DEFAULT_DELIVERABLE_FORMAT = "Vertical video"
DEFAULT_MAX_WINNERS = 1
DEFAULT_MAX_SUBMISSIONS_PER_CREATOR = 3


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None or value == "" else value


class BriefService:
    """
    Handles all business logic related to briefs.

    Workflow for writes:
        1. Map the camelCase payload onto a Brief.
        2. Check required fields and enumerations.
        3. Fill defaults.
        4. Persist via the repository.
    """

    def __init__(self, repo: BriefRepository):
        self.repo = repo

    # ── Writes ────────────────────────────────────────────

    def create(self, payload: Mapping[str, Any], identity: CallerIdentity) -> Brief:
        """
        Create a brief. Status defaults to PUBLISHED.

        Raises:
            ValidationError: If slug, title or orgName is missing, or a field
                holds an unknown value.
            ConflictError: If the slug is taken.
        """
        brief = brief_from_payload(payload)
        if not brief.slug or not brief.title or not brief.org_name:
            raise ValidationError("Missing required fields: slug, title, orgName")

        brief.overview = _or_default(brief.overview, "")
        brief.deliverable_ratio = _or_default(brief.deliverable_ratio, DEFAULT_DELIVERABLE_RATIO)
        brief.deliverable_length = _or_default(brief.deliverable_length, DEFAULT_DELIVERABLE_LENGTH)
        brief.deliverable_format = _or_default(brief.deliverable_format, DEFAULT_DELIVERABLE_FORMAT)
        brief.deadline = _or_default(
            brief.deadline,
            datetime.now(timezone.utc) + timedelta(days=BRIEF_DEFAULT_DEADLINE_DAYS),
        )
        brief.password = _or_default(brief.password, None)
        brief.owner_id = _or_default(brief.owner_id, identity.id)
        self._apply_common_defaults(brief)
        self._validate(brief)

        logger.info(f"Creating brief with slug: {brief.slug}")
        return self.repo.create(brief)

    def update(self, brief_id: int, payload: Mapping[str, Any]) -> Brief:
        """
        Overwrite every mutable field of a brief.

        Raises:
            ValidationError: If title or deadline is missing, or a field holds
                an unknown value.
            NotFoundError: If the brief does not exist.
        """
        brief = brief_from_payload(payload)
        if not brief.title or brief.deadline is None:
            raise ValidationError("Missing required fields: title, deadline")

        brief.overview = _or_default(brief.overview, "")
        self._apply_common_defaults(brief)
        self._validate(brief)

        logger.info(f"Updating brief: {brief_id}")
        return self.repo.update(brief_id, brief)

    # ── Reads ─────────────────────────────────────────────

    def get(self, brief_id: int) -> Brief:
        brief = self.repo.get_by_id(brief_id)
        if brief is None:
            raise NotFoundError("Brief not found")
        return brief

    def get_by_slug(self, slug: str) -> Brief:
        return self.repo.find_by_slug_or_fallback_id(slug)

    def list_briefs(self, status: Optional[str] = None) -> list[Brief]:
        briefs = self.repo.list_all_with_counts(status)
        logger.info(f"Returning {len(briefs)} briefs with counts")
        return briefs

    # ── Slug maintenance ──────────────────────────────────

    def backfill_slugs(self) -> dict:
        """
        Give every brief stored without a slug one derived from its title.

        A taken slug gets ``-{id}`` appended and is written once more; if that
        collides too, the brief is reported as failed and left untouched.
        A title that slugifies to nothing goes straight to ``-{id}``.

        Returns:
            {'updated': [(id, slug), ...], 'failed': [id, ...]}
        """
        result = {"updated": [], "failed": []}
        missing = self.repo.list_missing_slugs()
        logger.info(f"Found {len(missing)} briefs with missing slugs")

        for brief in missing:
            slug = generate_slug(brief.title or "")
            try:
                if not slug:
                    raise ConflictError("Empty slug")
                self.repo.assign_slug(brief.id, slug)
            except ConflictError:
                unique = disambiguate_slug(slug, brief.id)
                logger.info(f"Slug '{slug}' unavailable for brief {brief.id}, using '{unique}'")
                try:
                    self.repo.assign_slug(brief.id, unique)
                    slug = unique
                except ConflictError:
                    logger.error(f"Could not assign a unique slug to brief {brief.id}")
                    result["failed"].append(brief.id)
                    continue
            result["updated"].append((brief.id, slug))
            logger.info(f"Updated brief {brief.id}: \"{brief.title}\" -> slug: \"{slug}\"")
        return result

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _apply_common_defaults(brief: Brief) -> None:
        """Fallbacks shared by create and update."""
        brief.requirements = list(brief.requirements or [])
        brief.reward.type = _or_default(brief.reward.type, "CASH")
        brief.reward.amount = _or_default(brief.reward.amount, 0)
        brief.reward.currency = _or_default(brief.reward.currency, "USD")
        brief.reward.description = _or_default(brief.reward.description, None)
        brief.status = _or_default(brief.status, "PUBLISHED")
        brief.max_winners = _or_default(brief.max_winners, DEFAULT_MAX_WINNERS)
        brief.max_submissions_per_creator = _or_default(
            brief.max_submissions_per_creator, DEFAULT_MAX_SUBMISSIONS_PER_CREATOR
        )

    @staticmethod
    def _validate(brief: Brief) -> None:
        if brief.reward.type not in REWARD_TYPES:
            raise ValidationError(f"Invalid reward type. Must be one of: {', '.join(REWARD_TYPES)}")
        if brief.status not in BRIEF_STATUSES:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(BRIEF_STATUSES)}")
        if brief.max_winners < 1 or brief.max_submissions_per_creator < 1:
            raise ValidationError("maxWinners and maxSubmissionsPerCreator must be at least 1")
