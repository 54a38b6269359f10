"""
repositories/influencer_repo.py
-------------------------------
Data access layer for influencer applications.
All SQL queries related to the `influencers` table live here.
"""

from typing import Optional

from psycopg2 import errors

from db.connection import ConnectionPool
from models.influencer import InfluencerApplication
from repositories.row_mapper import (
    INFLUENCER_INSERT_COLUMNS,
    influencer_write_params,
    row_to_influencer,
)
from utils.errors import ConflictError, NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

DUPLICATE_EMAIL_MESSAGE = "An application with this email already exists"

# Timestamp and notes column touched by each target status.
_STATUS_UPDATES = {
    "approved": "admin_notes = %s, approved_at = NOW()",
    "rejected": "rejection_reason = %s, rejected_at = NOW()",
    "pending": "admin_notes = %s",
}


class InfluencerRepository:
    """Repository for CRUD operations on the influencers table."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    # ── CREATE ────────────────────────────────────────────

    def create(self, application: InfluencerApplication) -> InfluencerApplication:
        """
        Insert a new application.

        The UNIQUE constraint on ``email`` is the only duplicate check, so two
        concurrent applications with one email cannot both succeed.

        Raises:
            ConflictError: If an application with this email exists.
        """
        columns = ", ".join(INFLUENCER_INSERT_COLUMNS)
        placeholders = ", ".join(["%s"] * len(INFLUENCER_INSERT_COLUMNS))
        sql = f"INSERT INTO influencers ({columns}) VALUES ({placeholders}) RETURNING *;"
        try:
            with self.pool.connection() as conn:
                with self.pool.dict_cursor(conn) as cur:
                    cur.execute(sql, influencer_write_params(application))
                    row = cur.fetchone()
        except errors.UniqueViolation as e:
            logger.warning("Rejected duplicate influencer application")
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from e
        except Exception as e:
            logger.error(f"Failed to create influencer application: {e}")
            raise
        created = row_to_influencer(row)
        logger.info(f"Created influencer application #{created.id}")
        return created

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, influencer_id: int) -> Optional[InfluencerApplication]:
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute("SELECT * FROM influencers WHERE id = %s;", (influencer_id,))
                row = cur.fetchone()
        return row_to_influencer(row) if row else None

    def get_by_email(self, email: str) -> Optional[InfluencerApplication]:
        """Case-insensitive lookup of the application filed under an email."""
        sql = "SELECT * FROM influencers WHERE lower(email) = lower(%s) ORDER BY id LIMIT 1;"
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute(sql, (email,))
                row = cur.fetchone()
        return row_to_influencer(row) if row else None

    def list_by_status(self, status: str) -> list[InfluencerApplication]:
        """
        Applications filtered by exact status, or every one for ``"all"``.
        Newest application first.
        """
        sql = "SELECT * FROM influencers"
        params: list = []
        if status != "all":
            sql += " WHERE status = %s"
            params.append(status)
        sql += " ORDER BY applied_at DESC, id DESC;"

        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute(sql, params)
                return [row_to_influencer(r) for r in cur.fetchall()]

    # ── UPDATE ────────────────────────────────────────────

    def update_status(self, influencer_id: int, status: str,
                      notes: Optional[str] = None) -> InfluencerApplication:
        """
        Set a new status and file the notes where that status keeps them.

        Args:
            status: 'approved' | 'rejected' | 'pending' (validated by the caller).

        Raises:
            NotFoundError: If no application has this id.
        """
        sql = f"UPDATE influencers SET status = %s, {_STATUS_UPDATES[status]} WHERE id = %s RETURNING *;"
        try:
            with self.pool.connection() as conn:
                with self.pool.dict_cursor(conn) as cur:
                    cur.execute(sql, (status, notes, influencer_id))
                    row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to update influencer #{influencer_id}: {e}")
            raise
        if row is None:
            raise NotFoundError("Influencer not found")
        logger.info(f"Influencer #{influencer_id} {status}")
        return row_to_influencer(row)
