"""
models/template.py
------------------
Domain model for reusable brief templates.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class PromptTemplate:
    """
    A saved starting point for new briefs, private to its owner.

    Every field except ``name`` is optional; a brief created from a template
    still goes through the brief defaults.
    """
    owner_id: str
    name: str
    overview: Optional[str] = None
    requirements: list[str] = field(default_factory=list)
    deliverable_ratio: Optional[str] = None
    deliverable_length: Optional[str] = None
    deliverable_format: Optional[str] = None
    reward_type: Optional[str] = None
    reward_amount: Optional[str] = None
    reward_currency: Optional[str] = None
    reward_description: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
