"""
schemas/brief.py
----------------
Request bodies for brief writes. Every field is optional here; required
fields and defaults are decided by BriefService so that error messages
stay the same whichever layer is called.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class RewardIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = None
    amount: Optional[Union[Decimal, str]] = None
    currency: Optional[str] = None
    description: Optional[str] = None


class BriefIn(BaseModel):
    """
    Body for ``POST /api/briefs`` and ``PUT /api/briefs/{id}``.

    The reward may be sent nested or as flat ``reward*`` keys.
    """
    model_config = ConfigDict(populate_by_name=True)

    slug: Optional[str] = None
    title: Optional[str] = None
    org_name: Optional[str] = Field(None, alias="orgName")
    business_line: Optional[str] = Field(None, alias="businessLine")
    state: Optional[str] = None
    overview: Optional[str] = None
    requirements: Optional[list[str]] = None
    deliverable_ratio: Optional[str] = Field(None, alias="deliverableRatio")
    deliverable_length: Optional[str] = Field(None, alias="deliverableLength")
    deliverable_format: Optional[str] = Field(None, alias="deliverableFormat")
    reward: Optional[RewardIn] = None
    reward_type: Optional[str] = Field(None, alias="rewardType")
    reward_amount: Optional[Union[Decimal, str]] = Field(None, alias="rewardAmount")
    reward_currency: Optional[str] = Field(None, alias="rewardCurrency")
    reward_description: Optional[str] = Field(None, alias="rewardDescription")
    deadline: Optional[datetime] = None
    status: Optional[str] = None
    password: Optional[str] = None
    max_winners: Optional[int] = Field(None, alias="maxWinners")
    max_submissions_per_creator: Optional[int] = Field(None, alias="maxSubmissionsPerCreator")
    owner_id: Optional[str] = Field(None, alias="ownerId")

    def to_payload(self) -> dict:
        """camelCase dict of the fields actually provided."""
        return self.model_dump(by_alias=True, exclude_none=True)
