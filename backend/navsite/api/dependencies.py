"""
FastAPI dependency functions.

Provides reusable dependency injection functions for routes: the
key-value store, repositories, the auth service and the admin guard.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header

from navsite.core.database import async_session_maker
from navsite.core.exceptions import Unauthorized
from navsite.core.logging_config import get_logger
from navsite.core.security import SessionClaims, TokenService, get_token_service
from navsite.repositories.categories import CategoryRepository
from navsite.repositories.credentials import CredentialStore
from navsite.repositories.projects import ProjectRepository
from navsite.services.auth_service import AuthService
from navsite.services.interfaces.kv_store import IKeyValueStore
from navsite.services.kv_store import SQLKeyValueStore


logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def get_kv_store() -> IKeyValueStore:
    """Key-value store backed by the application database."""
    return SQLKeyValueStore(async_session_maker)


KVStore = Annotated[IKeyValueStore, Depends(get_kv_store)]
Tokens = Annotated[TokenService, Depends(get_token_service)]


def get_project_repository(store: KVStore) -> ProjectRepository:
    return ProjectRepository(store)


def get_category_repository(store: KVStore) -> CategoryRepository:
    return CategoryRepository(store)


def get_auth_service(store: KVStore, tokens: Tokens) -> AuthService:
    return AuthService(CredentialStore(store), tokens)


def authorize_header(
    authorization: Optional[str],
    tokens: TokenService,
) -> SessionClaims:
    """
    Authorize a request from its Authorization header value.

    Args:
        authorization: Raw header value, expected as ``Bearer <token>``
        tokens: Token service used to verify the token

    Returns:
        Claims of a valid admin token

    Raises:
        Unauthorized: If the header is missing or malformed, the token is
            invalid or expired, or the token does not carry admin rights
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthorized()

    token = authorization[len(BEARER_PREFIX):].strip()
    claims = tokens.verify(token)

    if claims is None or claims.is_admin is not True:
        raise Unauthorized()

    return claims


async def require_admin(
    tokens: Tokens,
    authorization: Annotated[Optional[str], Header()] = None,
) -> SessionClaims:
    """
    Dependency guarding admin-only routes.

    Example:
        @router.post("/projects")
        async def create_project(admin: AdminClaims, ...):
            ...

    Security:
        - Verifies the token signature against SECRET_KEY
        - Rejects expired tokens
        - Requires the isAdmin claim
        - Returns 401 with a JSON error body on any failure
    """
    try:
        return authorize_header(authorization, tokens)
    except Unauthorized:
        logger.info(
            "Rejected unauthorized request",
            extra={"has_header": authorization is not None},
        )
        raise


# Type aliases for dependency injection
AdminClaims = Annotated[SessionClaims, Depends(require_admin)]
Projects = Annotated[ProjectRepository, Depends(get_project_repository)]
Categories = Annotated[CategoryRepository, Depends(get_category_repository)]
Auth = Annotated[AuthService, Depends(get_auth_service)]
