"""
main.py
-------
Entry point for the BountyBoard API.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Seed the demo identity and choose how callers are identified.
    - Build the FastAPI application with CORS, error handling and routers.
"""

from contextlib import asynccontextmanager
from typing import Optional

import psycopg2
import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import (
    API_HOST,
    API_PORT,
    AUTH_MODE,
    CORS_ORIGINS,
    DEMO_USER_EMAIL,
    DEMO_USER_ID,
    DEMO_USER_NAME,
    INIT_SCHEMA_ON_STARTUP,
)
from db.connection import ConnectionPool, close_pool, init_pool
from db.init_db import create_tables
from handlers import briefs, feedback, health, influencers, portal, submissions, templates
from models.user import User
from repositories.user_repo import UserRepository
from security.auth import IdentityProvider, build_identity_provider
from utils.errors import AppError, ConfigurationError, StoreError
from utils.logger import get_logger

logger = get_logger(__name__)


def _open_pool() -> Optional[ConnectionPool]:
    """
    Start the pool and prepare the schema. A missing DATABASE_URL leaves the
    API running without a pool; an unreachable database aborts startup.
    """
    try:
        db_pool = init_pool()
    except ConfigurationError:
        return None

    if INIT_SCHEMA_ON_STARTUP:
        create_tables(db_pool)
    if AUTH_MODE == "demo":
        first_name, _, last_name = DEMO_USER_NAME.partition(" ")
        UserRepository(db_pool).ensure_user(User(
            id=DEMO_USER_ID,
            email=DEMO_USER_EMAIL,
            first_name=first_name or None,
            last_name=last_name or None,
        ))
    return db_pool


@asynccontextmanager
async def lifespan(app: FastAPI):
    owns_pool = app.state.pool is None
    if owns_pool:
        logger.info("Initializing database...")
        app.state.pool = _open_pool()
    if app.state.identity_provider is None:
        users = UserRepository(app.state.pool) if app.state.pool else None
        app.state.identity_provider = build_identity_provider(AUTH_MODE, users)
    logger.info(f"BountyBoard API ready (auth mode: {AUTH_MODE})")

    yield

    if owns_pool:
        close_pool()
    logger.info("BountyBoard API stopped.")


def register_error_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"error": ...}`` with the matching status."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

    @app.exception_handler(psycopg2.Error)
    async def handle_db_error(request: Request, exc: psycopg2.Error):
        error = StoreError.from_db_error("Database error", exc)
        logger.error(f"{request.method} {request.url.path} database error: {exc}")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request data", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} failed unexpectedly")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


class PreflightCORSMiddleware(CORSMiddleware):
    """Answers an accepted pre-flight with 200 and no body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            key: value for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


def create_app(pool: Optional[ConnectionPool] = None,
               identity_provider: Optional[IdentityProvider] = None) -> FastAPI:
    """
    Build the application.

    Args:
        pool: Use this pool instead of opening one from DATABASE_URL.
        identity_provider: Use this provider instead of the one AUTH_MODE names.
    """
    app = FastAPI(title="BountyBoard API", lifespan=lifespan)
    app.state.pool = pool
    app.state.identity_provider = identity_provider

    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(briefs.router)
    app.include_router(submissions.router)
    app.include_router(feedback.router)
    app.include_router(influencers.router)
    app.include_router(portal.router)
    app.include_router(templates.router)
    app.include_router(health.router)
    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    logger.info(f"Starting BountyBoard API on {API_HOST}:{API_PORT}")
    # log_config=None keeps uvicorn on the handler installed by utils.logger
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_config=None)


if __name__ == "__main__":
    main()
