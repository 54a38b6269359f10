"""
models/user.py
--------------
Domain model for brand accounts (users owning an organization profile).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class User:
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    org_name: Optional[str] = None
    org_slug: Optional[str] = None
    org_logo_url: Optional[str] = None
    org_website: Optional[str] = None
    org_description: Optional[str] = None
    is_onboarded: bool = False
    role: str = "admin"  # 'admin' | 'reviewer'
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def display_name(self) -> Optional[str]:
        """``first last``, else username, else email."""
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.username or self.email
