"""
schemas/submission.py
---------------------
Request bodies for submission review and feedback endpoints.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionStatusIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Optional[str] = None
    allows_resubmission: Optional[bool] = Field(None, alias="allowsResubmission")
    review_notes: Optional[str] = Field(None, alias="reviewNotes")


class PayoutIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payout_status: Optional[str] = Field(None, alias="payoutStatus")
    notes: Optional[str] = None


class FeedbackIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    comment: Optional[str] = None
    requires_action: bool = Field(False, alias="requiresAction")
