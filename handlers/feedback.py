"""
handlers/feedback.py
--------------------
Feedback endpoints. Delegates all logic to FeedbackService.
"""

from fastapi import APIRouter, Depends, status

from handlers.deps import get_feedback_service, parse_id
from repositories.row_mapper import feedback_to_json
from schemas.submission import FeedbackIn
from security.auth import CallerIdentity, get_current_identity
from services.feedback_service import FeedbackService

router = APIRouter(prefix="/api", tags=["Feedback"])


@router.get("/submissions/{submission_id}/feedback")
def list_feedback(submission_id: str, service: FeedbackService = Depends(get_feedback_service)):
    feedback = service.list_for_submission(parse_id(submission_id, "submission"))
    return [feedback_to_json(f) for f in feedback]


@router.post("/submissions/{submission_id}/feedback", status_code=status.HTTP_201_CREATED)
def add_feedback(
    submission_id: str,
    body: FeedbackIn,
    identity: CallerIdentity = Depends(get_current_identity),
    service: FeedbackService = Depends(get_feedback_service),
):
    feedback = service.add(
        parse_id(submission_id, "submission"), body.comment, identity,
        requires_action=body.requires_action,
    )
    return feedback_to_json(feedback)


@router.patch("/feedback/{feedback_id}")
def update_feedback(feedback_id: str, body: FeedbackIn,
                    service: FeedbackService = Depends(get_feedback_service)):
    return feedback_to_json(service.edit(parse_id(feedback_id, "feedback"), body.comment))


@router.delete("/feedback/{feedback_id}")
def delete_feedback(feedback_id: str, service: FeedbackService = Depends(get_feedback_service)):
    service.remove(parse_id(feedback_id, "feedback"))
    return {"message": "Feedback deleted successfully"}


@router.post("/submissions/{submission_id}/feedback/read")
def mark_feedback_read(submission_id: str,
                       service: FeedbackService = Depends(get_feedback_service)):
    updated = service.mark_read(parse_id(submission_id, "submission"))
    return {"message": "Feedback marked as read", "updated": updated}
