"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# ── PostgreSQL ────────────────────────────────────────────
# Empty when unset; the pool then refuses to start and every
# database-backed request answers with a configuration error.
DATABASE_URL: str = os.getenv("DATABASE_URL", "")
DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "10"))
DB_SSLMODE: str = os.getenv("DB_SSLMODE", "")
DB_CONNECT_TIMEOUT: int = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))
INIT_SCHEMA_ON_STARTUP: bool = _as_bool(os.getenv("INIT_SCHEMA_ON_STARTUP", "true"))

# ── HTTP server ───────────────────────────────────────────
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))

_raw_origins = os.getenv("CORS_ORIGINS", "*")
CORS_ORIGINS: list[str] = [o.strip() for o in _raw_origins.split(",") if o.strip()] or ["*"]

# ── Auth ──────────────────────────────────────────────────
# "demo": every request acts as the demo admin below.
# "header": the caller is looked up from the X-User-Id header.
AUTH_MODE: str = os.getenv("AUTH_MODE", "demo").lower()
DEMO_USER_ID: str = os.getenv("DEMO_USER_ID", "demo-user-1")
DEMO_USER_NAME: str = os.getenv("DEMO_USER_NAME", "Demo Admin")
DEMO_USER_EMAIL: str = os.getenv("DEMO_USER_EMAIL", "demo@bountyboard.local")

# ── Briefs ────────────────────────────────────────────────
BRIEF_DEFAULT_DEADLINE_DAYS: int = int(os.getenv("BRIEF_DEFAULT_DEADLINE_DAYS", "30"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
