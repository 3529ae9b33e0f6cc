"""
Chat API - Test Configuration

Pytest fixtures for the HTTP API.
Provides a test database, an app built with a per-test signing secret,
a client, and user fixtures.
"""

import os
import secrets
from typing import Generator, Optional

# chatapi.app builds a module-level app, which needs a signing secret
os.environ.setdefault("SECRET_KEY", secrets.token_hex(32))

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine, select
from sqlalchemy.pool import StaticPool

from chatapi.app import create_app
from chatapi.auth.password import hash_password
from chatapi.config import Settings
from chatapi.db.database import init_db
from chatapi.db.models import Role, RoleRecord, User, UserRole


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def test_engine():
    """Create a fresh test database engine (tables + roles) for each test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    init_db(engine)

    yield engine

    # Cleanup
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_settings() -> Settings:
    """Settings with a random signing secret so tokens never leak between tests."""
    return Settings(
        SECRET_KEY=secrets.token_hex(32),
        DATABASE_URL=TEST_DATABASE_URL,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture(scope="function")
def app(test_settings, test_engine):
    return create_app(test_settings, engine=test_engine)


@pytest.fixture(scope="function")
def tokens(app):
    return app.state.tokens


@pytest.fixture(scope="function")
def db_session(test_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client with fresh database."""
    with TestClient(app) as c:
        yield c


def create_user(db: Session, username: str, password: str, email: str, role: Role = Role.USER) -> User:
    """Insert a user and its role assignment directly."""
    role_record = db.exec(select(RoleRecord).where(RoleRecord.role_name == role.value)).one()
    user = User(
        username=username,
        password_hash=hash_password(password),
        email=email,
        role=role.value,
    )
    db.add(user)
    db.flush()
    db.add(UserRole(user_id=user.id, role_id=role_record.id))
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def alice(db_session) -> User:
    return create_user(db_session, "alice", "p1", "a@x.com")


@pytest.fixture(scope="function")
def bob(db_session) -> User:
    return create_user(db_session, "bob", "p2", "b@x.com")


@pytest.fixture(scope="function")
def admin(db_session) -> User:
    return create_user(db_session, "root", "AdminPass123", "root@x.com", Role.ADMIN)


def login_user(client: TestClient, username: str, password: str) -> Optional[str]:
    """Helper function to login and return the token."""
    response = client.post(
        "/login",
        json={"username": username, "password": password},
    )
    return response.json()["token"] if response.status_code == 200 else None


def auth_headers(token: str) -> dict:
    """Create authorization headers for authenticated requests."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def alice_headers(client, alice) -> dict:
    return auth_headers(login_user(client, "alice", "p1"))


@pytest.fixture(scope="function")
def bob_headers(client, bob) -> dict:
    return auth_headers(login_user(client, "bob", "p2"))


@pytest.fixture(scope="function")
def admin_headers(client, admin) -> dict:
    return auth_headers(login_user(client, "root", "AdminPass123"))
