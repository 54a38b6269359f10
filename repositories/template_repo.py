"""
repositories/template_repo.py
-----------------------------
Data access layer for prompt templates.
All SQL queries related to the `prompt_templates` table live here.
"""

from typing import Optional

from db.connection import ConnectionPool
from models.template import PromptTemplate
from repositories.row_mapper import TEMPLATE_FIELDS, row_to_template
from utils.errors import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

_WRITABLE = tuple(TEMPLATE_FIELDS)


class TemplateRepository:
    """Repository for CRUD operations on the prompt_templates table."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    # ── CREATE ────────────────────────────────────────────

    def create(self, template: PromptTemplate) -> PromptTemplate:
        columns = ("owner_id",) + _WRITABLE
        placeholders = ", ".join(["%s"] * len(columns))
        sql = (
            f"INSERT INTO prompt_templates ({', '.join(columns)}) "
            f"VALUES ({placeholders}) RETURNING *;"
        )
        params = [template.owner_id] + [getattr(template, column) for column in _WRITABLE]
        try:
            with self.pool.connection() as conn:
                with self.pool.dict_cursor(conn) as cur:
                    cur.execute(sql, params)
                    row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to create template for {template.owner_id}: {e}")
            raise
        created = row_to_template(row)
        logger.info(f"Created template #{created.id} '{created.name}'")
        return created

    # ── READ ──────────────────────────────────────────────

    def list_by_owner(self, owner_id: str) -> list[PromptTemplate]:
        """Templates of one owner, most recently edited first."""
        sql = "SELECT * FROM prompt_templates WHERE owner_id = %s ORDER BY updated_at DESC, id DESC;"
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute(sql, (owner_id,))
                return [row_to_template(r) for r in cur.fetchall()]

    def get_by_id(self, template_id: int) -> Optional[PromptTemplate]:
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute("SELECT * FROM prompt_templates WHERE id = %s;", (template_id,))
                row = cur.fetchone()
        return row_to_template(row) if row else None

    # ── UPDATE ────────────────────────────────────────────

    def update(self, template_id: int, changes: dict) -> PromptTemplate:
        """
        Apply a partial update and bump ``updated_at``.

        Args:
            changes: ``{column: value}``; only TEMPLATE_FIELDS columns are written.

        Raises:
            NotFoundError: If the template does not exist.
        """
        columns = [column for column in _WRITABLE if column in changes]
        assignments = [f"{column} = %s" for column in columns] + ["updated_at = NOW()"]
        params = [changes[column] for column in columns] + [template_id]
        sql = f"UPDATE prompt_templates SET {', '.join(assignments)} WHERE id = %s RETURNING *;"
        try:
            with self.pool.connection() as conn:
                with self.pool.dict_cursor(conn) as cur:
                    cur.execute(sql, params)
                    row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to update template #{template_id}: {e}")
            raise
        if row is None:
            raise NotFoundError("Template not found")
        return row_to_template(row)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, template_id: int) -> None:
        """
        Raises:
            NotFoundError: If the template does not exist.
        """
        try:
            with self.pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("DELETE FROM prompt_templates WHERE id = %s RETURNING id;", (template_id,))
                    deleted = cur.fetchone() is not None
        except Exception as e:
            logger.error(f"Failed to delete template #{template_id}: {e}")
            raise
        if not deleted:
            raise NotFoundError("Template not found")
        logger.info(f"Deleted template #{template_id}")
