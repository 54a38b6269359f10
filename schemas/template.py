"""
schemas/template.py
-------------------
Request body for prompt template writes.
"""

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TemplateIn(BaseModel):
    """
    Body for ``POST /api/templates`` and ``PATCH /api/templates/{id}``.

    Only the keys the client sent reach the service, so a PATCH leaves the
    other columns alone.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    overview: Optional[str] = None
    requirements: Optional[list[str]] = None
    deliverable_ratio: Optional[str] = Field(None, alias="deliverableRatio")
    deliverable_length: Optional[str] = Field(None, alias="deliverableLength")
    deliverable_format: Optional[str] = Field(None, alias="deliverableFormat")
    reward_type: Optional[str] = Field(None, alias="rewardType")
    reward_amount: Optional[Union[Decimal, str]] = Field(None, alias="rewardAmount")
    reward_currency: Optional[str] = Field(None, alias="rewardCurrency")
    reward_description: Optional[str] = Field(None, alias="rewardDescription")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)
