"""
handlers/briefs.py
------------------
Brief endpoints: public listing and lookup by slug, admin listing,
creation and update. Delegates all logic to BriefService.
"""

from fastapi import APIRouter, Depends, status

from handlers.deps import get_brief_service, parse_id
from repositories.row_mapper import brief_to_json
from schemas.brief import BriefIn
from security.auth import CallerIdentity, get_current_identity
from services.brief_service import BriefService
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Briefs"])


@router.get("/briefs")
def list_published_briefs(service: BriefService = Depends(get_brief_service)):
    """Published briefs, newest first, with organization and submission count."""
    return [brief_to_json(b) for b in service.list_briefs(status="PUBLISHED")]


@router.get("/admin/briefs")
def list_all_briefs(service: BriefService = Depends(get_brief_service)):
    return [brief_to_json(b) for b in service.list_briefs()]


@router.get("/briefs/by-slug/{slug}")
def get_brief_by_slug(slug: str, service: BriefService = Depends(get_brief_service)):
    """
    Resolve a brief by slug. ``brief-{id}`` also resolves briefs stored
    without a slug.
    """
    return brief_to_json(service.get_by_slug(slug))


@router.post("/briefs", status_code=status.HTTP_201_CREATED)
def create_brief(
    body: BriefIn,
    identity: CallerIdentity = Depends(get_current_identity),
    service: BriefService = Depends(get_brief_service),
):
    brief = service.create(body.to_payload(), identity)
    logger.info(f"Brief created with ID: {brief.id}")
    return brief_to_json(brief)


@router.put("/briefs/{brief_id}")
def update_brief(
    brief_id: str,
    body: BriefIn,
    service: BriefService = Depends(get_brief_service),
):
    brief = service.update(parse_id(brief_id, "brief"), body.to_payload())
    return brief_to_json(brief)


@router.get("/briefs/{brief_id}")
def get_brief(brief_id: str, service: BriefService = Depends(get_brief_service)):
    return brief_to_json(service.get(parse_id(brief_id, "brief")))
