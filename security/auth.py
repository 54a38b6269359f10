"""
security/auth.py
-----------------
Caller identity for the API.

Handlers never hardcode who is acting; they depend on
``get_current_identity``, which asks the ``IdentityProvider`` installed on
the app. Two providers exist:

    - DemoIdentityProvider: every request acts as the configured demo admin.
    - HeaderIdentityProvider: the caller sends ``X-User-Id`` and must exist
      in the users table.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from config import DEMO_USER_EMAIL, DEMO_USER_ID, DEMO_USER_NAME
from repositories.user_repo import UserRepository
from utils.errors import AuthenticationError, ConfigurationError
from utils.logger import get_logger

logger = get_logger(__name__)

USER_ID_HEADER = "X-User-Id"


@dataclass
class CallerIdentity:
    """Who is making the request."""
    id: str
    name: str
    email: Optional[str] = None
    role: str = "admin"


class IdentityProvider(ABC):
    """Resolves the caller of a request."""

    @abstractmethod
    def resolve(self, request: Request) -> CallerIdentity:
        """
        Raises:
            AuthenticationError: If the request carries no usable identity.
        """


class DemoIdentityProvider(IdentityProvider):
    """Single fixed identity; used for demos and tests."""

    def __init__(self, identity: Optional[CallerIdentity] = None):
        self.identity = identity or CallerIdentity(
            id=DEMO_USER_ID, name=DEMO_USER_NAME, email=DEMO_USER_EMAIL,
        )

    def resolve(self, request: Request) -> CallerIdentity:
        return self.identity


class HeaderIdentityProvider(IdentityProvider):
    """Trusts an upstream proxy to put the authenticated user id in a header."""

    def __init__(self, users: UserRepository):
        self.users = users

    def resolve(self, request: Request) -> CallerIdentity:
        user_id = request.headers.get(USER_ID_HEADER)
        if not user_id:
            raise AuthenticationError("Authentication required")

        user = self.users.get_by_id(user_id)
        if user is None:
            logger.warning(f"Unknown user id in {USER_ID_HEADER}: {user_id}")
            raise AuthenticationError("Unknown user")
        return CallerIdentity(
            id=user.id,
            name=user.display_name or user.id,
            email=user.email,
            role=user.role,
        )


def build_identity_provider(mode: str, users: Optional[UserRepository]) -> IdentityProvider:
    """Pick the provider named by the AUTH_MODE setting."""
    if mode == "demo":
        return DemoIdentityProvider()
    if mode == "header":
        if users is None:
            raise ConfigurationError("AUTH_MODE=header requires a configured database")
        return HeaderIdentityProvider(users)
    raise ConfigurationError(f"Unknown AUTH_MODE '{mode}'. Use 'demo' or 'header'.")


def get_current_identity(request: Request) -> CallerIdentity:
    """
    FastAPI dependency returning the caller.

    Usage:
        @router.post("/briefs")
        def create_brief(identity: CallerIdentity = Depends(get_current_identity)):
            ...
    """
    return request.app.state.identity_provider.resolve(request)
