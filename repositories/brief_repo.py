"""
repositories/brief_repo.py
--------------------------
Data access layer for briefs.
All SQL queries related to the `briefs` table live here.
"""

from typing import Optional

from psycopg2 import errors

from db.connection import ConnectionPool
from models.brief import Brief
from repositories.row_mapper import (
    BRIEF_INSERT_COLUMNS,
    BRIEF_UPDATE_COLUMNS,
    brief_write_params,
    row_to_brief,
)
from utils.errors import ConflictError, NotFoundError
from utils.logger import get_logger
from utils.slug import parse_fallback_slug

logger = get_logger(__name__)

# Brief columns plus the owner's organization profile.
_SELECT_WITH_OWNER = """
    SELECT
        b.*,
        u.org_name AS user_org_name,
        u.org_slug,
        u.org_logo_url,
        u.org_website,
        u.org_description
    FROM briefs b
    LEFT JOIN users u ON b.owner_id = u.id
"""

_COUNT_SUBMISSIONS = "SELECT COUNT(*) AS count FROM submissions WHERE brief_id = %s;"


class BriefRepository:
    """Repository for CRUD operations on the briefs table."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    # ── CREATE ────────────────────────────────────────────

    def create(self, brief: Brief) -> Brief:
        """
        Insert a new brief. Defaults must already be applied.

        Returns:
            The stored Brief with its nested reward. Organization and
            submission count are not populated; re-fetch for those.

        Raises:
            ConflictError: If the slug is already taken.
        """
        columns = ", ".join(BRIEF_INSERT_COLUMNS)
        placeholders = ", ".join(["%s"] * len(BRIEF_INSERT_COLUMNS))
        sql = f"""
            INSERT INTO briefs ({columns}, created_at, updated_at)
            VALUES ({placeholders}, NOW(), NOW())
            RETURNING *;
        """
        try:
            with self.pool.connection() as conn:
                with self.pool.dict_cursor(conn) as cur:
                    cur.execute(sql, brief_write_params(brief, BRIEF_INSERT_COLUMNS))
                    row = cur.fetchone()
        except errors.UniqueViolation as e:
            logger.warning(f"Brief slug '{brief.slug}' already exists")
            raise ConflictError(
                f"A brief with slug '{brief.slug}' already exists", slug=brief.slug
            ) from e
        except Exception as e:
            logger.error(f"Failed to create brief '{brief.slug}': {e}")
            raise
        created = row_to_brief(row)
        logger.info(f"Created brief #{created.id} ({created.slug})")
        return created

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, brief_id: int) -> Optional[Brief]:
        """Fetch a brief with its organization, or None."""
        sql = _SELECT_WITH_OWNER + " WHERE b.id = %s;"
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute(sql, (brief_id,))
                row = cur.fetchone()
        return row_to_brief(row) if row else None

    def find_by_slug_or_fallback_id(self, slug: str) -> Brief:
        """
        Look a brief up by slug; for ``brief-{digits}`` slugs fall back to the id.

        Raises:
            NotFoundError: Carrying the requested slug, when both lookups miss.
        """
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute(_SELECT_WITH_OWNER + " WHERE b.slug = %s;", (slug,))
                row = cur.fetchone()

                fallback_id = parse_fallback_slug(slug)
                if row is None and fallback_id is not None:
                    logger.info(f"Trying fallback with ID: {fallback_id}")
                    cur.execute(_SELECT_WITH_OWNER + " WHERE b.id = %s;", (fallback_id,))
                    row = cur.fetchone()

        if row is None:
            logger.info(f"Brief not found for slug: {slug}")
            raise NotFoundError("Brief not found", slug=slug)
        return row_to_brief(row)

    def list_all_with_counts(self, status: Optional[str] = None) -> list[Brief]:
        """
        Every brief with organization data and submission count, newest first.

        Args:
            status: Optional exact status filter (the public listing passes
                'PUBLISHED').
        """
        sql = """
            SELECT
                b.*,
                u.org_name AS user_org_name,
                u.org_slug,
                u.org_logo_url,
                u.org_website,
                u.org_description,
                (SELECT COUNT(*) FROM submissions s WHERE s.brief_id = b.id) AS submission_count
            FROM briefs b
            LEFT JOIN users u ON b.owner_id = u.id
        """
        params: list = []
        if status:
            sql += " WHERE b.status = %s"
            params.append(status)
        sql += " ORDER BY b.created_at DESC;"

        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute(sql, params)
                return [row_to_brief(r) for r in cur.fetchall()]

    def list_missing_slugs(self) -> list[Brief]:
        """Briefs stored with a NULL or empty slug."""
        sql = "SELECT id, title, slug FROM briefs WHERE slug IS NULL OR slug = '' ORDER BY id;"
        with self.pool.connection() as conn:
            with self.pool.dict_cursor(conn) as cur:
                cur.execute(sql)
                rows = cur.fetchall()
        # Keep the stored (empty) slug rather than the brief-{id} display fallback.
        briefs = []
        for r in rows:
            brief = row_to_brief(r)
            brief.slug = r.get("slug")
            briefs.append(brief)
        return briefs

    # ── UPDATE ────────────────────────────────────────────

    def update(self, brief_id: int, brief: Brief) -> Brief:
        """
        Overwrite every mutable field of a brief.

        Returns:
            The updated Brief including a freshly counted submission_count.

        Raises:
            NotFoundError: If no brief has this id.
        """
        assignments = ",\n                ".join(f"{c} = %s" for c in BRIEF_UPDATE_COLUMNS)
        sql = f"""
            UPDATE briefs SET
                {assignments},
                updated_at = NOW()
            WHERE id = %s
            RETURNING *;
        """
        params = brief_write_params(brief, BRIEF_UPDATE_COLUMNS) + [brief_id]
        try:
            with self.pool.connection() as conn:
                with self.pool.dict_cursor(conn) as cur:
                    cur.execute(sql, params)
                    row = cur.fetchone()
                    if row is None:
                        raise NotFoundError("Brief not found")
                    cur.execute(_COUNT_SUBMISSIONS, (brief_id,))
                    count = int(cur.fetchone()["count"])
        except NotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to update brief #{brief_id}: {e}")
            raise

        updated = row_to_brief(row)
        updated.submission_count = count
        logger.info(f"Updated brief #{brief_id}")
        return updated

    def assign_slug(self, brief_id: int, slug: str) -> bool:
        """
        Set the slug of one brief.

        Returns:
            True if a row was updated.

        Raises:
            ConflictError: If another brief already uses the slug.
        """
        sql = "UPDATE briefs SET slug = %s, updated_at = NOW() WHERE id = %s;"
        try:
            with self.pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (slug, brief_id))
                    return cur.rowcount > 0
        except errors.UniqueViolation as e:
            raise ConflictError(f"Slug '{slug}' already exists", slug=slug) from e
