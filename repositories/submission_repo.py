"""
repositories/submission_repo.py
-------------------------------
Data access layer for submissions.
All SQL queries related to the `submissions` table live here.
"""

from typing import Optional

from db.connection import ConnectionPool
from models.submission import Submission
from repositories.row_mapper import row_to_submission
from utils.errors import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

_HAS_FEEDBACK = "EXISTS (SELECT 1 FROM feedback f WHERE f.submission_id = s.id) AS has_feedback"

# Submissions joined to their brief, the brief's owner and the linked creator.
_LISTING_SELECT = f"""
    SELECT
        s.*,
        u.username AS creator_username,
        u.email AS user_email,
        u.first_name AS creator_first_name,
        u.last_name AS creator_last_name,
        b.title AS brief_title,
        b.slug AS brief_slug,
        b.org_name AS brief_org_name,
        b.reward_type,
        b.reward_amount,
        b.reward_currency,
        b.reward_description,
        o.org_name AS owner_org_name,
        {_HAS_FEEDBACK}
    FROM submissions s
    JOIN briefs b ON b.id = s.brief_id
    LEFT JOIN users u ON u.id = s.creator_id
    LEFT JOIN users o ON o.id = b.owner_id
"""


class SubmissionRepository:
    """Repository for read and review operations on the submissions table."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    # ── READ ──────────────────────────────────────────────

    def list_for_brief(self, brief_id: int) -> list[Submission]:
        """
        All submissions of a brief, newest first, with brief and creator data.

        Returns:
            An empty list for a brief with no submissions.

        Raises:
            NotFoundError: If the brief itself does not exist.
        """
        sql = _LISTING_SELECT + " WHERE s.brief_id = %s ORDER BY s.submitted_at DESC;"
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute("SELECT id FROM briefs WHERE id = %s;", (brief_id,))
                if cur.fetchone() is None:
                    raise NotFoundError("Brief not found", briefId=brief_id)
                cur.execute(sql, (brief_id,))
                rows = cur.fetchall()
        logger.info(f"Found {len(rows)} submissions for brief #{brief_id}")
        return [row_to_submission(r) for r in rows]

    def list_for_creator(self, email: str, brief_id: Optional[int] = None) -> list[Submission]:
        """
        Submissions filed under a creator email (case-insensitive), newest first.

        Without ``brief_id`` only published briefs are searched.
        """
        sql = _LISTING_SELECT + " WHERE lower(s.creator_email) = lower(%s)"
        params: list = [email]
        if brief_id is None:
            sql += " AND b.status = 'PUBLISHED'"
        else:
            sql += " AND s.brief_id = %s"
            params.append(brief_id)
        sql += " ORDER BY s.submitted_at DESC;"

        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute(sql, params)
                return [row_to_submission(r) for r in cur.fetchall()]

    def get_by_id(self, submission_id: int) -> Optional[Submission]:
        sql = f"SELECT s.*, {_HAS_FEEDBACK} FROM submissions s WHERE s.id = %s;"
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute(sql, (submission_id,))
                row = cur.fetchone()
        return row_to_submission(row) if row else None

    def list_chain(self, root_id: int) -> list[Submission]:
        """The root submission and every resubmission of it, oldest version first."""
        sql = f"""
            SELECT s.*, {_HAS_FEEDBACK}
            FROM submissions s
            WHERE s.id = %s OR s.parent_submission_id = %s
            ORDER BY s.submission_version ASC, s.submitted_at ASC;
        """
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute(sql, (root_id, root_id))
                return [row_to_submission(r) for r in cur.fetchall()]

    # ── UPDATE ────────────────────────────────────────────

    def update_status(
        self,
        submission_id: int,
        status: str,
        allows_resubmission: Optional[bool] = None,
        review_notes: Optional[str] = None,
        reviewed_by: Optional[str] = None,
    ) -> Submission:
        """
        Record a review decision.

        SELECTED stamps ``selected_at`` and opens the payout (PENDING).
        ``allows_resubmission`` is only recorded for NOT_SELECTED.

        Raises:
            NotFoundError: If the submission does not exist.
        """
        assignments = ["status = %s"]
        params: list = [status]
        if status == "SELECTED":
            assignments += ["selected_at = NOW()", "payout_status = 'PENDING'"]
        if status == "NOT_SELECTED" and allows_resubmission is not None:
            assignments.append("allows_resubmission = %s")
            params.append(allows_resubmission)
        if review_notes is not None:
            assignments.append("review_notes = %s")
            params.append(review_notes)
        if reviewed_by is not None:
            assignments.append("reviewed_by = %s")
            params.append(reviewed_by)
        params.append(submission_id)

        sql = f"UPDATE submissions SET {', '.join(assignments)} WHERE id = %s RETURNING *;"
        row = self._update_returning(sql, params, f"status of submission #{submission_id}")
        logger.info(f"Submission #{submission_id} marked {status}")
        return row_to_submission(row)

    def update_payout(self, submission_id: int, payout_status: str,
                      notes: Optional[str] = None) -> Submission:
        """
        Move a submission's payout along; PAID stamps ``paid_at``.

        Raises:
            NotFoundError: If the submission does not exist.
        """
        assignments = ["payout_status = %s"]
        params: list = [payout_status]
        if payout_status == "PAID":
            assignments.append("paid_at = NOW()")
        if notes:
            assignments.append("payout_notes = %s")
            params.append(notes)
        params.append(submission_id)

        sql = f"UPDATE submissions SET {', '.join(assignments)} WHERE id = %s RETURNING *;"
        row = self._update_returning(sql, params, f"payout of submission #{submission_id}")
        logger.info(f"Submission #{submission_id} payout {payout_status}")
        return row_to_submission(row)

    # ── HELPERS ───────────────────────────────────────────

    def _update_returning(self, sql: str, params: list, what: str) -> dict:
        try:
            with self.pool.connection() as conn:
                with self.pool.dict_cursor(conn) as cur:
                    cur.execute(sql, params)
                    row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to update {what}: {e}")
            raise
        if row is None:
            raise NotFoundError("Submission not found")
        return row
