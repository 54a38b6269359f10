"""
models/feedback.py
------------------
Domain model for reviewer comments on a submission.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Feedback:
    submission_id: int
    author_id: str
    author_name: str
    comment: str
    requires_action: bool = False
    is_read: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
