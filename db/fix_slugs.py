"""
db/fix_slugs.py
---------------
One-off maintenance: give every brief stored without a slug one derived
from its title.

Usage:
    python -m db.fix_slugs
"""

import sys

from db.connection import close_pool, init_pool
from repositories.brief_repo import BriefRepository
from services.brief_service import BriefService
from utils.logger import get_logger

logger = get_logger(__name__)


def run() -> int:
    """Backfill slugs; returns the process exit code."""
    try:
        service = BriefService(BriefRepository(init_pool()))
        result = service.backfill_slugs()
    except Exception as e:
        logger.error(f"Slug backfill failed: {e}")
        return 1
    finally:
        close_pool()

    logger.info(
        f"Backfill complete: {len(result['updated'])} updated, {len(result['failed'])} failed"
    )
    return 1 if result["failed"] else 0


if __name__ == "__main__":
    sys.exit(run())
