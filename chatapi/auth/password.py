"""
Chat API - Password Hashing Utilities

Credential verifier backed by bcrypt.

Security:
- Never log or expose plaintext passwords
- bcrypt includes salt automatically
- Inputs longer than bcrypt's 72-byte limit are truncated before hashing
"""

import bcrypt


# Work factor for bcrypt (2^10 iterations)
BCRYPT_WORK_FACTOR = 10

# bcrypt ignores (newer releases reject) input beyond 72 bytes
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plaintext password

    Returns:
        bcrypt hash string (includes salt)

    Example:
        >>> hashed = hash_password("p1")
        >>> hashed.startswith("$2b$")
        True
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_WORK_FACTOR)
    hashed = bcrypt.hashpw(_encode(password), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Side-effect free. Uses constant-time comparison.

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    if plain_password is None or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except (ValueError, TypeError):
        # Invalid hash format
        return False
