"""
Shared builders for tests: a mocked connection pool and sample rows.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_pool():
    """
    A pool whose ``connection()`` yields ``conn`` and whose cursors (dict or
    plain) are all the same ``cursor`` mock.

    Returns:
        (pool, cursor)
    """
    cursor = MagicMock()
    conn = MagicMock()
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    pool.dict_cursor.return_value.__enter__.return_value = cursor
    conn.cursor.return_value.__enter__.return_value = cursor
    return pool, cursor


def brief_row(**overrides) -> dict:
    row = {
        "id": 1,
        "slug": "nfl-bonus",
        "title": "NFL Bonus",
        "org_name": "Acme Sports",
        "business_line": "Sportsbook",
        "state": "NJ",
        "overview": "Show us your best touchdown celebration.",
        "requirements": ["Mention Acme", "Use #AcmeNFL"],
        "deliverable_ratio": "9:16",
        "deliverable_length": "15-30 seconds",
        "deliverable_format": "Vertical video",
        "reward_type": "CASH",
        "reward_amount": "500",
        "reward_currency": "USD",
        "reward_description": None,
        "deadline": NOW,
        "status": "PUBLISHED",
        "password": None,
        "max_winners": 1,
        "max_submissions_per_creator": 3,
        "owner_id": "demo-user-1",
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


def submission_row(**overrides) -> dict:
    row = {
        "id": 10,
        "brief_id": 1,
        "creator_id": None,
        "creator_name": "Sam Creator",
        "creator_email": "sam@example.com",
        "creator_handle": "@samcreates",
        "creator_phone": None,
        "creator_betting_account": None,
        "message": "First take",
        "video_url": "https://cdn.example.com/v/10.mp4",
        "video_file_name": "10.mp4",
        "video_mime_type": "video/mp4",
        "video_size_bytes": 1048576,
        "status": "RECEIVED",
        "feedback": None,
        "payout_status": "NOT_APPLICABLE",
        "payout_amount": None,
        "payout_notes": None,
        "reviewed_by": None,
        "review_notes": None,
        "selected_at": None,
        "paid_at": None,
        "submitted_at": NOW,
        "parent_submission_id": None,
        "submission_version": 1,
        "allows_resubmission": False,
        "has_feedback": False,
    }
    row.update(overrides)
    return row


def feedback_row(**overrides) -> dict:
    row = {
        "id": 3,
        "submission_id": 10,
        "author_id": "demo-user-1",
        "author_name": "Demo Admin",
        "comment": "Great energy, trim the intro.",
        "requires_action": 1,
        "is_read": 0,
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


def influencer_row(**overrides) -> dict:
    row = {
        "id": 7,
        "first_name": "Jordan",
        "last_name": "Lee",
        "email": "jordan@example.com",
        "phone": None,
        "instagram_handle": "@jordanlee",
        "instagram_followers": 45000,
        "instagram_verified": False,
        "tiktok_handle": None,
        "youtube_channel": None,
        "status": "pending",
        "id_verified": False,
        "bank_verified": False,
        "admin_notes": None,
        "rejection_reason": None,
        "applied_at": NOW,
        "approved_at": None,
        "rejected_at": None,
    }
    row.update(overrides)
    return row


def template_row(**overrides) -> dict:
    row = {
        "id": 5,
        "owner_id": "admin-1",
        "name": "Sportsbook launch",
        "overview": "Launch week push.",
        "requirements": ["Mention the promo code"],
        "deliverable_ratio": "9:16",
        "deliverable_length": None,
        "deliverable_format": None,
        "reward_type": "BONUS_BETS",
        "reward_amount": "100",
        "reward_currency": "USD",
        "reward_description": "in Free Bets",
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row
