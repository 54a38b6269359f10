"""
handlers/influencers.py
-----------------------
Influencer application endpoints: the public apply form and the admin
review queue. Delegates all logic to InfluencerService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from handlers.deps import get_influencer_service
from repositories.row_mapper import influencer_to_json
from schemas.influencer import InfluencerApplyIn, InfluencerStatusIn
from services.influencer_service import InfluencerService

router = APIRouter(prefix="/api", tags=["Influencers"])

APPLY_SUCCESS_MESSAGE = (
    "Application submitted successfully. We'll review it and get back to you soon!"
)


@router.post("/influencers/apply", status_code=status.HTTP_201_CREATED)
def apply(body: InfluencerApplyIn,
          service: InfluencerService = Depends(get_influencer_service)):
    application = service.apply(body.to_payload())
    return {
        "success": True,
        "message": APPLY_SUCCESS_MESSAGE,
        "applicationId": application.id,
    }


@router.get("/admin/influencers")
def list_influencers(
    status_filter: Optional[str] = Query(None, alias="status"),
    service: InfluencerService = Depends(get_influencer_service),
):
    """Applications by status; ``pending`` when omitted, ``all`` for everything."""
    influencers = service.list_applications(status_filter)
    return {
        "success": True,
        "influencers": [influencer_to_json(i) for i in influencers],
        "count": len(influencers),
    }


@router.post("/admin/influencers/update-status")
def update_influencer_status(body: InfluencerStatusIn,
                             service: InfluencerService = Depends(get_influencer_service)):
    influencer = service.update_status(body.influencer_id, body.status, body.notes)
    return {
        "success": True,
        "message": f"Influencer {body.status} successfully",
        "influencer": influencer_to_json(influencer),
    }
