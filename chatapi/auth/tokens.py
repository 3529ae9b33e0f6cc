"""
Chat API - JWT Token Management

Issues and verifies stateless session tokens carrying:
- User ID (sub)
- Username
- Role (for RBAC)

Security:
- Tokens expire one hour after issuance by default
- Verification trusts the embedded claims and never consults the database,
  so a role change only takes effect on the next login
- There is no revocation; anyone holding the shared secret can mint tokens
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from pydantic import BaseModel, Field, ValidationError


# Token configuration
ACCESS_TOKEN_EXPIRE_MINUTES = 60


class InvalidTokenError(Exception):
    """Raised when JWT validation fails."""
    pass


class TokenIdentity(BaseModel):
    """
    Identity decoded from a verified session token.

    Attributes:
        user_id: Subject (user ID)
        username: Username at issuance
        role: Role at issuance
        issued_at: Issued-at time
        expires_at: Expiration time
    """
    user_id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    role: str = Field(..., description="User role")
    issued_at: datetime = Field(..., description="Issued at time")
    expires_at: datetime = Field(..., description="Expiration time")


class TokenService:
    """
    Signs and verifies session tokens with a shared secret.

    The secret is passed in explicitly so each app (and each test)
    can run with its own key.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self.expire_minutes * 60

    def issue(
        self,
        user_id: int,
        username: str,
        role: str,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Create a signed access token.

        Args:
            user_id: User's identifier
            username: User's login name
            role: User's RBAC role
            now: Override issuance time

        Returns:
            Encoded JWT string
        """
        now = now or datetime.now(timezone.utc)
        expire = now + timedelta(minutes=self.expire_minutes)

        payload = {
            "sub": str(user_id),
            "username": username,
            "role": role,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenIdentity:
        """
        Verify and decode a token.

        Raises:
            InvalidTokenError: If token is malformed, badly signed, expired,
                or missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_iat": True, "require_sub": True},
            )
        except JWTError as e:
            raise InvalidTokenError(f"Token validation failed: {str(e)}")

        try:
            return TokenIdentity(
                user_id=int(payload["sub"]),
                username=payload["username"],
                role=payload["role"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise InvalidTokenError(f"Token claims invalid: {str(e)}")
