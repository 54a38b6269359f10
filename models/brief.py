"""
models/brief.py
---------------
Domain model for briefs (sponsored content bounties).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

REWARD_TYPES = ("CASH", "BONUS_BETS", "OTHER")
BRIEF_STATUSES = ("DRAFT", "PUBLISHED", "ARCHIVED")


@dataclass
class Reward:
    """
    What a winning creator receives.

    Attributes:
        type: 'CASH' | 'BONUS_BETS' | 'OTHER'.
        amount: Numeric amount, or free text such as "Casino Credits".
        currency: ISO currency code (default: USD).
        description: Optional human-readable note ("in Free Bets").
    """
    type: str = "CASH"
    amount: Union[int, float, str, None] = 0
    currency: str = "USD"
    description: Optional[str] = None


@dataclass
class Organization:
    """Display data of the brand behind a brief."""
    name: Optional[str] = None
    slug: Optional[str] = None
    logo_url: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Brief:
    """
    Represents a brand's content bounty.

    Attributes:
        id: Database primary key (None for new records).
        slug: Unique URL identifier; ``brief-{id}`` when stored without one.
        title: Headline shown to creators.
        org_name: Denormalized brand name, used when the owner has no org profile.
        requirements: Ordered list of content rules.
        deliverable_ratio / deliverable_length / deliverable_format: Video requirements.
        reward: Nested reward details.
        deadline: Last moment submissions are accepted.
        status: 'DRAFT' | 'PUBLISHED' | 'ARCHIVED'.
        password: Optional access gate (stored, not enforced here).
        owner_id: Id of the user owning the organization.
        organization: Joined owner org data (only on read paths that join).
        submission_count: Number of submissions (only on read paths that count).
    """
    title: Optional[str] = None
    org_name: Optional[str] = None
    slug: Optional[str] = None
    business_line: Optional[str] = None
    state: Optional[str] = None
    overview: Optional[str] = None
    requirements: list[str] = field(default_factory=list)
    deliverable_ratio: Optional[str] = None
    deliverable_length: Optional[str] = None
    deliverable_format: Optional[str] = None
    reward: Reward = field(default_factory=Reward)
    deadline: Optional[datetime] = None
    status: Optional[str] = None
    password: Optional[str] = None
    max_winners: Optional[int] = None
    max_submissions_per_creator: Optional[int] = None
    owner_id: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    organization: Optional[Organization] = None
    submission_count: Optional[int] = None
