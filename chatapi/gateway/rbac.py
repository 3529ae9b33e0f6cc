"""
Chat API - Role-Based Access Control (RBAC)

Coarse permissioning by a fixed role label.
The decision is a pure function of the decoded identity and an allow-list,
so it can be checked without an HTTP harness.

Security:
- Deny-by-default: an empty allow-list admits nobody
- Roles are NOT hierarchical (admin is not implicitly a user)
- The role checked is the one embedded in the token at issuance
"""

from typing import Iterable

from chatapi.auth.tokens import TokenIdentity
from chatapi.db.models import Role


def _role_name(role) -> str:
    return role.value if isinstance(role, Role) else str(role)


def is_role_allowed(identity: TokenIdentity, allowed_roles: Iterable) -> bool:
    """
    Check if an identity's role is in the allow-list.

    Args:
        identity: Decoded token identity
        allowed_roles: Role enums or role names

    Returns:
        True if permitted, False otherwise
    """
    if identity is None:
        return False
    allowed = {_role_name(r) for r in allowed_roles}
    return identity.role in allowed
