"""
Chat API - Security Dependencies

FastAPI dependencies forming the access control gate:
1. get_current_user - bearer token presence and validity
2. require_roles    - role allow-list, stacked after get_current_user

Usage:
    @router.get("/protected")
    async def protected_route(user: TokenIdentity = Depends(get_current_user)):
        ...

    @router.get("/admin-only")
    async def admin_route(user: TokenIdentity = Depends(require_roles(Role.ADMIN))):
        ...
"""

import logging
from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session as DBSession

from chatapi.auth.tokens import InvalidTokenError, TokenIdentity, TokenService
from chatapi.errors import ForbiddenError, UnauthorizedError
from chatapi.gateway.rbac import is_role_allowed


logger = logging.getLogger(__name__)

# HTTP Bearer scheme for JWT extraction; absence is reported as 403 below
security = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Generator[DBSession, None, None]:
    """Yield a database session from app state."""
    db = request.app.state.db_session_factory()
    try:
        yield db
    finally:
        db.close()


def get_token_service(request: Request) -> TokenService:
    """Token service configured for this app."""
    return request.app.state.tokens


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> TokenIdentity:
    """
    Validate the bearer token and return the caller's identity.

    The decoded identity is also attached to ``request.state.user``.

    Raises:
        ForbiddenError: Missing token
        UnauthorizedError: Invalid or expired token
    """
    if not credentials or not credentials.credentials:
        raise ForbiddenError("Token not provided")

    try:
        identity = tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.info("Rejected token on %s: %s", request.url.path, e)
        raise UnauthorizedError("Invalid token")

    request.state.user = identity
    return identity


def require_roles(*roles):
    """
    Dependency factory requiring one of the given roles.

    Runs the authentication check first, then the role check.

    Raises:
        ForbiddenError: If the token's role is not in the allow-list
    """
    async def dependency(user: TokenIdentity = Depends(get_current_user)) -> TokenIdentity:
        if not is_role_allowed(user, roles):
            logger.warning("User %s (role=%s) denied role-gated access", user.user_id, user.role)
            raise ForbiddenError("Access denied: insufficient permissions")
        return user

    return dependency
