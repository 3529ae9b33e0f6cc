"""
Chat API - User Service

Registration, login and account lifecycle.

Multi-statement operations (registration, cascade deletion, role change)
run in a single transaction and roll back on failure.

Admin variants (update_any_user, delete_any_user) do not re-check the
caller's role; the route's role gate is the only admin check.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import delete, or_, update
from sqlmodel import Session as DBSession, select

from chatapi.auth.password import hash_password, verify_password
from chatapi.auth.tokens import TokenService
from chatapi.db.models import Chat, Message, RoleRecord, User, UserRole
from chatapi.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)


logger = logging.getLogger(__name__)


def _find_role(db: DBSession, role_name: str) -> Optional[RoleRecord]:
    return db.exec(select(RoleRecord).where(RoleRecord.role_name == role_name)).first()


def _ensure_unique(db: DBSession, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None):
    clauses = []
    if username:
        clauses.append(User.username == username)
    if email:
        clauses.append(User.email == email)
    if not clauses:
        return

    statement = select(User).where(or_(*clauses))
    if exclude_id is not None:
        statement = statement.where(User.id != exclude_id)

    if db.exec(statement).first():
        raise ConflictError("Username or email already exists")


def register(
    db: DBSession,
    tokens: TokenService,
    username: str,
    password: str,
    email: str,
    role_name: str = "user",
) -> Tuple[User, str, str]:
    """
    Register a new identity and assign it a role.

    Returns:
        Tuple of (user, role name, freshly issued token)

    Raises:
        ConflictError: Username or email already taken
        BadRequestError: Role not present in the registry
    """
    _ensure_unique(db, username, email)

    role = _find_role(db, role_name)
    if role is None:
        raise BadRequestError("Role not found")

    user = User(
        username=username,
        password_hash=hash_password(password),
        email=email,
        role=role.role_name,
    )

    try:
        db.add(user)
        db.flush()
        db.add(UserRole(user_id=user.id, role_id=role.id))
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info("Registered user %s (id=%s, role=%s)", user.username, user.id, user.role)

    token = tokens.issue(user.id, user.username, user.role)
    return user, role.role_name, token


def login(db: DBSession, tokens: TokenService, username: str, password: str) -> str:
    """
    Authenticate by username and password.

    Raises:
        NotFoundError: Unknown username
        UnauthorizedError: Password mismatch
    """
    user = db.exec(select(User).where(User.username == username)).first()
    if user is None:
        logger.info("Login failed for %r: user_not_found", username)
        raise NotFoundError("User not found")

    if not verify_password(password, user.password_hash):
        logger.info("Login failed for user %s: invalid_password", user.id)
        raise UnauthorizedError("Invalid password")

    user.last_login = datetime.now(timezone.utc)
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User %s logged in", user.id)
    return tokens.issue(user.id, user.username, user.role)


def list_users(db: DBSession) -> List[User]:
    return list(db.exec(select(User).order_by(User.id)).all())


def get_user(db: DBSession, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _apply_update(db: DBSession, user_id: int, fields: dict) -> None:
    result = db.exec(update(User).where(User.id == user_id).values(**fields))
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError("User not found")


def update_profile(
    db: DBSession,
    caller_id: int,
    user_id: int,
    username: Optional[str] = None,
    email: Optional[str] = None,
) -> User:
    """
    Update the caller's own username and/or email.

    Raises:
        ForbiddenError: Caller is not the account owner
        BadRequestError: No fields supplied
        NotFoundError: Account does not exist
        ConflictError: New username or email belongs to someone else
    """
    if caller_id != user_id:
        raise ForbiddenError("You can only update your own account")

    fields = {k: v for k, v in (("username", username), ("email", email)) if v}
    if not fields:
        raise BadRequestError("No fields provided for update")

    _ensure_unique(db, fields.get("username"), fields.get("email"), exclude_id=user_id)

    _apply_update(db, user_id, fields)
    db.commit()
    return get_user(db, user_id)


def update_any_user(
    db: DBSession,
    user_id: int,
    username: Optional[str] = None,
    email: Optional[str] = None,
    role: Optional[str] = None,
) -> User:
    """
    Admin variant of profile update; also allows changing the role.

    A role change rewrites the user's role assignment. Tokens already
    issued keep their old role until they expire.
    """
    fields = {
        k: v for k, v in (("username", username), ("email", email), ("role", role)) if v
    }
    if not fields:
        raise BadRequestError("No fields provided for update")

    role_record = None
    if role:
        role_record = _find_role(db, role)
        if role_record is None:
            raise BadRequestError("Role not found")

    _ensure_unique(db, fields.get("username"), fields.get("email"), exclude_id=user_id)

    try:
        _apply_update(db, user_id, fields)
        if role_record is not None:
            db.exec(delete(UserRole).where(UserRole.user_id == user_id))
            db.add(UserRole(user_id=user_id, role_id=role_record.id))
        db.commit()
    except Exception:
        db.rollback()
        raise

    if role_record is not None:
        logger.info("Role of user %s changed to %s", user_id, role_record.role_name)
    return get_user(db, user_id)


def _cascade_delete(db: DBSession, user_id: int) -> None:
    owned_chats = select(Chat.id).where(Chat.user_id == user_id)

    try:
        db.exec(
            delete(Message).where(
                or_(Message.user_id == user_id, Message.chat_id.in_(owned_chats))
            ).execution_options(synchronize_session=False)
        )
        db.exec(delete(Chat).where(Chat.user_id == user_id))
        db.exec(delete(UserRole).where(UserRole.user_id == user_id))
        result = db.exec(delete(User).where(User.id == user_id))
        if result.rowcount == 0:
            raise NotFoundError("User not found")
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Deleted user %s and related data", user_id)


def delete_account(db: DBSession, caller_id: int, user_id: int) -> None:
    """
    Delete the caller's own account with its messages, chats and role assignments.

    Raises:
        ForbiddenError: Caller is not the account owner
        NotFoundError: Account does not exist
    """
    if caller_id != user_id:
        raise ForbiddenError("You can only delete your own account")
    _cascade_delete(db, user_id)


def delete_any_user(db: DBSession, user_id: int) -> None:
    """Admin variant of account deletion."""
    _cascade_delete(db, user_id)
