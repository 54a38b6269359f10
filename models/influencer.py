"""
models/influencer.py
--------------------
Domain model for creator applications to the platform.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

APPLICATION_STATUSES = ("pending", "approved", "rejected")


@dataclass
class InfluencerApplication:
    """
    A creator's request to join, reviewed by an admin.

    Attributes:
        status: 'pending' | 'approved' | 'rejected'. New records are pending.
        id_verified / bank_verified / instagram_verified: Manual checks
            performed by the admin team.
        admin_notes: Notes stored on approval (or when reset to pending).
        rejection_reason: Notes stored on rejection.
    """
    first_name: str
    last_name: str
    email: str
    instagram_handle: str
    phone: Optional[str] = None
    instagram_followers: Optional[int] = None
    tiktok_handle: Optional[str] = None
    youtube_channel: Optional[str] = None
    status: str = "pending"
    id_verified: bool = False
    bank_verified: bool = False
    instagram_verified: bool = False
    admin_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    id: Optional[int] = None
    applied_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None

    def is_decided(self) -> bool:
        """True once an admin has approved or rejected the application."""
        return self.status in ("approved", "rejected")
