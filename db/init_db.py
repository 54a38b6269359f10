"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import ConnectionPool
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: brand accounts; organization data is joined onto briefs
CREATE TABLE IF NOT EXISTS users (
    id                  TEXT PRIMARY KEY,
    email               TEXT UNIQUE,
    username            TEXT,
    first_name          TEXT,
    last_name           TEXT,
    org_name            TEXT,
    org_slug            TEXT UNIQUE,
    org_logo_url        TEXT,
    org_website         TEXT,
    org_description     TEXT,
    is_onboarded        BOOLEAN DEFAULT FALSE,
    role                TEXT DEFAULT 'admin',
    created_at          TIMESTAMPTZ DEFAULT NOW(),
    updated_at          TIMESTAMPTZ DEFAULT NOW()
);

-- Briefs table: sponsored content bounties
CREATE TABLE IF NOT EXISTS briefs (
    id                          SERIAL PRIMARY KEY,
    slug                        TEXT UNIQUE,
    title                       TEXT NOT NULL,
    org_name                    TEXT NOT NULL,
    business_line               TEXT,
    state                       TEXT,
    overview                    TEXT NOT NULL DEFAULT '',
    requirements                TEXT[] NOT NULL DEFAULT '{}',
    deliverable_ratio           TEXT,
    deliverable_length          TEXT,
    deliverable_format          TEXT,
    reward_type                 TEXT NOT NULL DEFAULT 'CASH'
                                CHECK (reward_type IN ('CASH', 'BONUS_BETS', 'OTHER')),
    reward_amount               TEXT NOT NULL DEFAULT '0',
    reward_currency             TEXT DEFAULT 'USD',
    reward_description          TEXT,
    deadline                    TIMESTAMPTZ NOT NULL,
    status                      TEXT NOT NULL DEFAULT 'DRAFT'
                                CHECK (status IN ('DRAFT', 'PUBLISHED', 'ARCHIVED')),
    password                    TEXT,
    max_winners                 INT DEFAULT 1 CHECK (max_winners >= 1),
    max_submissions_per_creator INT DEFAULT 3 CHECK (max_submissions_per_creator >= 1),
    owner_id                    TEXT NOT NULL,
    created_at                  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at                  TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Submissions table: creator videos entered against a brief
CREATE TABLE IF NOT EXISTS submissions (
    id                      SERIAL PRIMARY KEY,
    brief_id                INT NOT NULL REFERENCES briefs(id),
    creator_id              TEXT,
    creator_name            TEXT,
    creator_email           TEXT,
    creator_phone           TEXT,
    creator_handle          TEXT,
    creator_betting_account TEXT,
    message                 TEXT,
    video_url               TEXT NOT NULL,
    video_file_name         TEXT,
    video_mime_type         TEXT,
    video_size_bytes        BIGINT,
    status                  TEXT NOT NULL DEFAULT 'RECEIVED',
    feedback                TEXT,
    payout_status           TEXT NOT NULL DEFAULT 'NOT_APPLICABLE',
    payout_amount           NUMERIC(12,2),
    payout_notes            TEXT,
    reviewed_by             TEXT,
    review_notes            TEXT,
    selected_at             TIMESTAMPTZ,
    paid_at                 TIMESTAMPTZ,
    submitted_at            TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    parent_submission_id    INT REFERENCES submissions(id),
    submission_version      INT NOT NULL DEFAULT 1,
    allows_resubmission     BOOLEAN NOT NULL DEFAULT FALSE
);

-- Feedback table: reviewer comments on a submission
CREATE TABLE IF NOT EXISTS feedback (
    id              SERIAL PRIMARY KEY,
    submission_id   INT NOT NULL REFERENCES submissions(id) ON DELETE CASCADE,
    author_id       TEXT NOT NULL,
    author_name     TEXT NOT NULL,
    comment         TEXT NOT NULL CHECK (length(btrim(comment)) > 0),
    requires_action INT NOT NULL DEFAULT 0,
    is_read         INT NOT NULL DEFAULT 0,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Databases created before the read flag existed
ALTER TABLE feedback ADD COLUMN IF NOT EXISTS is_read INT NOT NULL DEFAULT 0;

-- Influencers table: creator applications; email uniqueness is the
-- duplicate-application guard
CREATE TABLE IF NOT EXISTS influencers (
    id                  SERIAL PRIMARY KEY,
    first_name          TEXT NOT NULL,
    last_name           TEXT NOT NULL,
    email               TEXT NOT NULL UNIQUE,
    phone               TEXT,
    instagram_handle    TEXT NOT NULL,
    instagram_followers INT,
    instagram_verified  INT DEFAULT 0,
    tiktok_handle       TEXT,
    youtube_channel     TEXT,
    status              TEXT NOT NULL DEFAULT 'pending'
                        CHECK (status IN ('pending', 'approved', 'rejected')),
    id_verified         INT DEFAULT 0,
    bank_verified       INT DEFAULT 0,
    admin_notes         TEXT,
    rejection_reason    TEXT,
    applied_at          TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    approved_at         TIMESTAMPTZ,
    rejected_at         TIMESTAMPTZ
);

-- Prompt templates: per-owner presets for new briefs
CREATE TABLE IF NOT EXISTS prompt_templates (
    id                  SERIAL PRIMARY KEY,
    owner_id            TEXT NOT NULL,
    name                TEXT NOT NULL,
    overview            TEXT,
    requirements        TEXT[],
    deliverable_ratio   TEXT,
    deliverable_length  TEXT,
    deliverable_format  TEXT,
    reward_type         TEXT,
    reward_amount       TEXT,
    reward_currency     TEXT,
    reward_description  TEXT,
    created_at          TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at          TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_briefs_owner ON briefs(owner_id);
CREATE INDEX IF NOT EXISTS idx_briefs_created ON briefs(created_at DESC);
CREATE INDEX IF NOT EXISTS idx_submissions_brief ON submissions(brief_id, submitted_at DESC);
CREATE INDEX IF NOT EXISTS idx_submissions_parent ON submissions(parent_submission_id);
CREATE INDEX IF NOT EXISTS idx_feedback_submission ON feedback(submission_id, created_at DESC);
CREATE INDEX IF NOT EXISTS idx_influencers_status ON influencers(status, applied_at DESC);
CREATE INDEX IF NOT EXISTS idx_influencers_email ON influencers(lower(email));
CREATE INDEX IF NOT EXISTS idx_submissions_creator_email ON submissions(lower(creator_email));
CREATE INDEX IF NOT EXISTS idx_templates_owner ON prompt_templates(owner_id, updated_at DESC);
"""


def create_tables(db_pool: ConnectionPool) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    try:
        with db_pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import init_pool, close_pool
    create_tables(init_pool())
    close_pool()
    print("Database schema created successfully.")
