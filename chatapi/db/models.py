"""
Chat API - Database Models

SQLModel tables for identities, the role registry, role assignments,
chats and messages. Uses PostgreSQL for production, SQLite for local development.

Security:
- Passwords stored as bcrypt hashes only
- Chats and messages carry the owning/authoring user id used by ownership filters
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, String, Text, DateTime


class Role(str, Enum):
    """
    Fixed roles for RBAC.

    Names must match rows in the ``roles`` registry.
    """
    USER = "user"
    ADMIN = "admin"


class User(SQLModel, table=True):
    """
    User account (identity).

    Attributes:
        id: Auto-increment identifier, used as the token subject.
            Never reused, so a deleted account's token cannot match a new user
        username: Login identifier (unique)
        email: Contact address (unique)
        password_hash: bcrypt hash (never store plaintext)
        role: Role name embedded into issued tokens
        last_login: Set on every successful login (UTC)
    """
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(
        sa_column=Column(String(255), unique=True, index=True, nullable=False),
        description="Login identifier"
    )
    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="bcrypt password hash"
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, index=True, nullable=False),
        description="User email address"
    )
    role: str = Field(
        sa_column=Column(String(50), nullable=False, default=Role.USER.value),
        description="Role name for RBAC"
    )
    last_login: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="Last successful login timestamp"
    )


class RoleRecord(SQLModel, table=True):
    """Role registry entry. Assignments may only reference existing names."""
    __tablename__ = "roles"

    id: Optional[int] = Field(default=None, primary_key=True)
    role_name: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False),
    )


class UserRole(SQLModel, table=True):
    """Assignment of a registered role to a user."""
    __tablename__ = "user_roles"

    user_id: int = Field(foreign_key="users.id", primary_key=True)
    role_id: int = Field(foreign_key="roles.id", primary_key=True)


class Chat(SQLModel, table=True):
    """Chat thread owned by a single user."""
    __tablename__ = "chats"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    title: str = Field(sa_column=Column(String(255), nullable=False))


class Message(SQLModel, table=True):
    """Message posted into a chat by its author."""
    __tablename__ = "messages"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    chat_id: int = Field(foreign_key="chats.id", nullable=False, index=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    content: str = Field(sa_column=Column(Text, nullable=False))
