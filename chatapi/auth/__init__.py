"""
Chat API - Authentication Package

Stateless JWT authentication with:
- bcrypt password hashing
- Role allow-list gating
- Shared-secret token service configured per app
"""

from chatapi.auth.dependencies import get_current_user, require_roles
from chatapi.auth.tokens import InvalidTokenError, TokenIdentity, TokenService

__all__ = [
    "get_current_user",
    "require_roles",
    "InvalidTokenError",
    "TokenIdentity",
    "TokenService",
]
