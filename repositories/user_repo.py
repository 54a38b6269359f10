"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db.connection import ConnectionPool
from models.user import User
from repositories.row_mapper import row_to_user
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for CRUD operations on the users table."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    def ensure_user(self, user: User) -> User:
        """
        Insert a user if they don't exist, or return the existing record.
        Uses PostgreSQL's ON CONFLICT (upsert) for atomicity; an existing
        profile is never overwritten, only a missing email is filled in.

        Args:
            user: The user to create (id is required).

        Returns:
            The stored User.
        """
        sql = """
            INSERT INTO users (id, email, first_name, last_name, org_name, role)
            VALUES (%s, %s, %s, %s, %s, %s)
            ON CONFLICT (id) DO UPDATE SET email = COALESCE(users.email, EXCLUDED.email)
            RETURNING *;
        """
        try:
            with self.pool.connection() as conn:
                with self.pool.dict_cursor(conn) as cur:
                    cur.execute(sql, (
                        user.id, user.email, user.first_name, user.last_name,
                        user.org_name, user.role,
                    ))
                    row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to ensure user {user.id}: {e}")
            raise
        return row_to_user(row)

    def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Fetch a user by id.

        Returns:
            User or None.
        """
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute("SELECT * FROM users WHERE id = %s;", (user_id,))
                row = cur.fetchone()
        return row_to_user(row) if row else None
