"""
handlers/deps.py
----------------
Shared FastAPI dependencies: the connection pool, service construction
and path-id parsing.
"""

from fastapi import Depends, Request

from db.connection import NOT_CONFIGURED_MESSAGE, ConnectionPool
from repositories.brief_repo import BriefRepository
from repositories.feedback_repo import FeedbackRepository
from repositories.influencer_repo import InfluencerRepository
from repositories.submission_repo import SubmissionRepository
from repositories.template_repo import TemplateRepository
from services.brief_service import BriefService
from services.feedback_service import FeedbackService
from services.influencer_service import InfluencerService
from services.portal_service import PortalService
from services.submission_service import SubmissionService
from services.template_service import TemplateService
from utils.errors import ConfigurationError, ValidationError


def parse_id(raw: str, label: str) -> int:
    """
    Path segment -> positive integer id.

    Raises:
        ValidationError: ``Invalid {label} ID`` for anything else.
    """
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} ID") from None
    if value <= 0:
        raise ValidationError(f"Invalid {label} ID")
    return value


def get_pool(request: Request) -> ConnectionPool:
    pool = request.app.state.pool
    if pool is None:
        raise ConfigurationError(NOT_CONFIGURED_MESSAGE)
    return pool


def get_brief_service(pool: ConnectionPool = Depends(get_pool)) -> BriefService:
    return BriefService(BriefRepository(pool))


def get_submission_service(pool: ConnectionPool = Depends(get_pool)) -> SubmissionService:
    return SubmissionService(SubmissionRepository(pool))


def get_feedback_service(pool: ConnectionPool = Depends(get_pool)) -> FeedbackService:
    return FeedbackService(FeedbackRepository(pool))


def get_influencer_service(pool: ConnectionPool = Depends(get_pool)) -> InfluencerService:
    return InfluencerService(InfluencerRepository(pool))


def get_portal_service(pool: ConnectionPool = Depends(get_pool)) -> PortalService:
    return PortalService(
        InfluencerRepository(pool), BriefRepository(pool), SubmissionRepository(pool)
    )


def get_template_service(pool: ConnectionPool = Depends(get_pool)) -> TemplateService:
    return TemplateService(TemplateRepository(pool))
