"""
repositories/feedback_repo.py
-----------------------------
Data access layer for reviewer feedback on submissions.
"""

from psycopg2 import errors

from db.connection import ConnectionPool
from models.feedback import Feedback
from repositories.row_mapper import row_to_feedback
from utils.errors import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)


class FeedbackRepository:
    """Repository for CRUD operations on the feedback table."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    def list_for_submission(self, submission_id: int) -> list[Feedback]:
        """
        Feedback for a submission, newest first.

        Raises:
            NotFoundError: If the submission does not exist.
        """
        sql = "SELECT * FROM feedback WHERE submission_id = %s ORDER BY created_at DESC, id DESC;"
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute("SELECT id FROM submissions WHERE id = %s;", (submission_id,))
                if cur.fetchone() is None:
                    raise NotFoundError("Submission not found")
                cur.execute(sql, (submission_id,))
                return [row_to_feedback(r) for r in cur.fetchall()]

    def create(self, feedback: Feedback) -> Feedback:
        """
        Insert a feedback row. The comment must already be trimmed.

        Raises:
            NotFoundError: If the submission does not exist.
        """
        sql = """
            INSERT INTO feedback (submission_id, author_id, author_name, comment, requires_action)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING *;
        """
        try:
            with self.pool.connection() as conn:
                with self.pool.dict_cursor(conn) as cur:
                    cur.execute(sql, (
                        feedback.submission_id, feedback.author_id, feedback.author_name,
                        feedback.comment, 1 if feedback.requires_action else 0,
                    ))
                    row = cur.fetchone()
        except errors.ForeignKeyViolation as e:
            raise NotFoundError("Submission not found") from e
        except Exception as e:
            logger.error(f"Failed to add feedback to submission #{feedback.submission_id}: {e}")
            raise
        created = row_to_feedback(row)
        logger.info(f"Added feedback #{created.id} to submission #{created.submission_id}")
        return created

    def update(self, feedback_id: int, comment: str) -> Feedback:
        """
        Replace the comment of a feedback row.

        Raises:
            NotFoundError: If the feedback does not exist.
        """
        sql = "UPDATE feedback SET comment = %s, updated_at = NOW() WHERE id = %s RETURNING *;"
        try:
            with self.pool.connection() as conn:
                with self.pool.dict_cursor(conn) as cur:
                    cur.execute(sql, (comment, feedback_id))
                    row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to update feedback #{feedback_id}: {e}")
            raise
        if row is None:
            raise NotFoundError("Feedback not found")
        return row_to_feedback(row)

    def delete(self, feedback_id: int) -> None:
        """
        Delete a feedback row.

        Raises:
            NotFoundError: If the feedback does not exist.
        """
        sql = "DELETE FROM feedback WHERE id = %s RETURNING id;"
        try:
            with self.pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (feedback_id,))
                    deleted = cur.fetchone() is not None
        except Exception as e:
            logger.error(f"Failed to delete feedback #{feedback_id}: {e}")
            raise
        if not deleted:
            raise NotFoundError("Feedback not found")
        logger.info(f"Deleted feedback #{feedback_id}")

    def mark_read(self, submission_id: int) -> int:
        """
        Flag every feedback row of a submission as read.

        Returns:
            How many rows were unread before the call.

        Raises:
            NotFoundError: If the submission does not exist.
        """
        sql = "UPDATE feedback SET is_read = 1 WHERE submission_id = %s AND is_read = 0;"
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT id FROM submissions WHERE id = %s;", (submission_id,))
                if cur.fetchone() is None:
                    raise NotFoundError("Submission not found")
                cur.execute(sql, (submission_id,))
                updated = cur.rowcount
        logger.info(f"Marked {updated} feedback entries read on submission #{submission_id}")
        return updated
