"""
handlers/submissions.py
-----------------------
Submission endpoints for reviewers: listing per brief, review decisions,
payouts and resubmission history. Delegates all logic to SubmissionService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from handlers.deps import get_submission_service, parse_id
from repositories.row_mapper import submission_to_json
from schemas.submission import PayoutIn, SubmissionStatusIn
from security.auth import CallerIdentity, get_current_identity
from services.submission_service import SubmissionService
from utils.errors import ValidationError

router = APIRouter(prefix="/api", tags=["Submissions"])


@router.get("/briefs/{brief_id}/submissions")
def list_brief_submissions(brief_id: str,
                           service: SubmissionService = Depends(get_submission_service)):
    submissions = service.list_for_brief(parse_id(brief_id, "brief"))
    return [submission_to_json(s) for s in submissions]


@router.get("/admin/submissions")
def list_admin_submissions(
    brief_id: Optional[str] = Query(None, alias="briefId"),
    service: SubmissionService = Depends(get_submission_service),
):
    """Same listing as the brief route, keyed by the ``briefId`` query parameter."""
    if not brief_id:
        raise ValidationError("Brief ID is required")
    submissions = service.list_for_brief(parse_id(brief_id, "brief"))
    return [submission_to_json(s) for s in submissions]


@router.patch("/submissions/{submission_id}/status")
def review_submission(
    submission_id: str,
    body: SubmissionStatusIn,
    identity: CallerIdentity = Depends(get_current_identity),
    service: SubmissionService = Depends(get_submission_service),
):
    submission = service.review(
        parse_id(submission_id, "submission"),
        body.status,
        identity,
        allows_resubmission=body.allows_resubmission,
        review_notes=body.review_notes,
    )
    return submission_to_json(submission)


@router.patch("/submissions/{submission_id}/payout")
def update_submission_payout(
    submission_id: str,
    body: PayoutIn,
    service: SubmissionService = Depends(get_submission_service),
):
    submission = service.update_payout(
        parse_id(submission_id, "submission"), body.payout_status, body.notes
    )
    return submission_to_json(submission)


@router.get("/submissions/{submission_id}")
def get_submission(submission_id: str,
                   service: SubmissionService = Depends(get_submission_service)):
    return submission_to_json(service.get(parse_id(submission_id, "submission")))


@router.get("/submissions/{submission_id}/history")
def get_submission_history(submission_id: str,
                           service: SubmissionService = Depends(get_submission_service)):
    return [submission_to_json(s) for s in service.history(parse_id(submission_id, "submission"))]
