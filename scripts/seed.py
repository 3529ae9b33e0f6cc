"""
Chat API - Database Seed Script

Creates tables, seeds the role registry and creates the default admin account.

Usage:
    DEFAULT_ADMIN_PASSWORD=... python -m scripts.seed
"""

import logging
import sys

from sqlmodel import Session, select

from chatapi.config import settings
from chatapi.db.database import get_engine, init_db
from chatapi.db.models import Role, RoleRecord, User, UserRole
from chatapi.auth.password import hash_password
from chatapi.logging_config import configure_logging


logger = logging.getLogger("chatapi.seed")


def seed_admin_user() -> bool:
    """
    Create the default admin account if it does not exist.

    Returns:
        True if a user was created
    """
    if not settings.DEFAULT_ADMIN_PASSWORD:
        raise SystemExit("DEFAULT_ADMIN_PASSWORD must be set")

    engine = get_engine(settings.DATABASE_URL)
    init_db(engine)

    with Session(engine) as session:
        existing = session.exec(
            select(User).where(User.username == settings.DEFAULT_ADMIN_USERNAME)
        ).first()

        if existing:
            logger.info("Admin user already exists.")
            return False

        role = session.exec(
            select(RoleRecord).where(RoleRecord.role_name == Role.ADMIN.value)
        ).one()

        admin = User(
            username=settings.DEFAULT_ADMIN_USERNAME,
            email=settings.DEFAULT_ADMIN_EMAIL,
            password_hash=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
            role=Role.ADMIN.value,
        )
        session.add(admin)
        session.flush()
        session.add(UserRole(user_id=admin.id, role_id=role.id))
        session.commit()

        logger.info("Admin user %s created.", admin.username)
        return True


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    seed_admin_user()
    sys.exit(0)
