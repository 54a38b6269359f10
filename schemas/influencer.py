"""
schemas/influencer.py
---------------------
Request bodies for the influencer application flow.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InfluencerApplyIn(BaseModel):
    """Public application form. Required fields are checked by InfluencerService."""
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    instagram_handle: Optional[str] = Field(None, alias="instagramHandle")
    phone: Optional[str] = None
    instagram_followers: Optional[int] = Field(None, alias="instagramFollowers")
    tiktok_handle: Optional[str] = Field(None, alias="tiktokHandle")
    youtube_channel: Optional[str] = Field(None, alias="youtubeChannel")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class InfluencerStatusIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    influencer_id: Optional[int] = Field(None, alias="influencerId")
    status: Optional[str] = None
    notes: Optional[str] = None
