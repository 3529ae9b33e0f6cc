"""
Chat API - Database Configuration

SQLModel database setup with connection pooling.
Supports PostgreSQL (production) and SQLite (development).

Usage:
    from chatapi.db.database import get_engine, init_db

    engine = get_engine()
    init_db(engine)  # Creates tables and seeds the role registry
"""

import logging
from typing import Optional

from sqlmodel import SQLModel, Session, create_engine, select
from sqlalchemy.pool import StaticPool

from chatapi.config import settings


logger = logging.getLogger(__name__)


def get_engine(database_url: Optional[str] = None, echo: bool = False):
    """
    Create SQLAlchemy engine with appropriate configuration.

    Args:
        database_url: Override database URL
        echo: Log SQL statements

    Returns:
        SQLAlchemy Engine
    """
    url = database_url or settings.DATABASE_URL

    if url.startswith("sqlite"):
        # SQLite configuration
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        # PostgreSQL configuration with connection pooling
        engine = create_engine(
            url,
            echo=echo,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
        )

    return engine


def seed_roles(session: Session) -> None:
    """Insert any fixed role missing from the ``roles`` registry."""
    from chatapi.db.models import Role, RoleRecord

    existing = set(session.exec(select(RoleRecord.role_name)).all())
    missing = [role.value for role in Role if role.value not in existing]

    for name in missing:
        session.add(RoleRecord(role_name=name))

    if missing:
        session.commit()
        logger.info("Seeded roles: %s", ", ".join(missing))


def init_db(engine) -> None:
    """
    Initialize database tables and the role registry.

    Safe to call multiple times (uses CREATE IF NOT EXISTS).
    """
    # Import models to register them with SQLModel
    from chatapi.db import models  # noqa: F401

    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        seed_roles(session)


def get_session_factory(engine):
    """
    Create a session factory bound to engine.

    Returns:
        Callable that creates new database sessions
    """
    def session_factory() -> Session:
        return Session(engine)

    return session_factory

