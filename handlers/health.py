"""
handlers/health.py
------------------
Liveness and database connectivity check.
"""

from datetime import datetime, timezone

import psycopg2
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from db.connection import NOT_CONFIGURED_MESSAGE
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health")
def health(request: Request):
    body = {
        "status": "healthy",
        "database": {"connected": False, "error": None},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    pool = request.app.state.pool
    if pool is None:
        body["status"] = "error"
        body["database"]["error"] = NOT_CONFIGURED_MESSAGE
        return JSONResponse(status_code=503, content=body)

    try:
        pool.ping()
    except psycopg2.Error as e:
        logger.error(f"Health check failed: {e}")
        body["status"] = "error"
        body["database"]["error"] = str(e).strip()
        return JSONResponse(status_code=503, content=body)

    body["database"]["connected"] = True
    return body
