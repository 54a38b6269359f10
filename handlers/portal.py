"""
handlers/portal.py
------------------
Creator portal endpoints. Delegates all logic to PortalService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from handlers.deps import get_portal_service, parse_id
from repositories.row_mapper import brief_to_json, submission_to_json
from services.portal_service import PortalService

router = APIRouter(prefix="/api/influencers", tags=["Portal"])


@router.get("/portal")
def open_portal(email: Optional[str] = None,
                service: PortalService = Depends(get_portal_service)):
    """Approved creators only: their profile and the published briefs."""
    influencer, briefs = service.open_portal(email)
    return {
        "influencer": {
            "id": influencer.id,
            "firstName": influencer.first_name,
            "lastName": influencer.last_name,
            "email": influencer.email,
            "instagramHandle": influencer.instagram_handle,
            "status": influencer.status,
        },
        "briefs": [brief_to_json(b) for b in briefs],
    }


@router.get("/submissions")
def list_creator_submissions(
    email: Optional[str] = None,
    brief_id: Optional[str] = Query(None, alias="briefId"),
    service: PortalService = Depends(get_portal_service),
):
    brief = parse_id(brief_id, "brief") if brief_id else None
    return [submission_to_json(s) for s in service.creator_submissions(email, brief)]
