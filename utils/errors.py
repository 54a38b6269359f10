"""
utils/errors.py
---------------
Application error taxonomy.

Repositories and services raise these; the HTTP layer maps each one to
its status code and renders ``{"error": message, **extra}``.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for every error the API knows how to render."""

    status_code: int = 500

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = {k: v for k, v in extra.items() if v is not None}

    def to_dict(self) -> dict:
        return {"error": self.message, **self.extra}


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400


class AuthenticationError(AppError):
    """No usable caller identity on the request."""

    status_code = 401


class ForbiddenError(AppError):
    """The caller is known but not allowed in yet."""

    status_code = 403


class NotFoundError(AppError):
    """A referenced entity does not exist."""

    status_code = 404


class ConflictError(AppError):
    """A uniqueness rule was violated (duplicate email, duplicate slug)."""

    status_code = 409


class ConfigurationError(AppError):
    """Required external configuration (e.g. DATABASE_URL) is absent."""

    status_code = 500


class StoreError(AppError):
    """Any other persistence failure."""

    status_code = 500

    @classmethod
    def from_db_error(cls, message: str, exc: Exception) -> "StoreError":
        """Wrap a psycopg2 error, passing its code and detail through."""
        detail: Optional[str] = getattr(exc, "pgerror", None) or str(exc) or None
        return cls(message, code=getattr(exc, "pgcode", None), detail=detail)
