"""
Chat API - Configuration Management

Centralized configuration using Pydantic Settings.
All secrets and connection strings are loaded from environment variables.

Security: No secrets are hardcoded. Use .env for local development.
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        SECRET_KEY: Shared JWT signing key for session tokens
        JWT_ALGORITHM: JWT signature scheme
        ACCESS_TOKEN_EXPIRE_MINUTES: Session token lifetime
        DATABASE_URL: SQLAlchemy connection string
        ALLOWED_ORIGINS: CORS allowed origins for the frontend
        LOG_LEVEL: Root log level for the application loggers
    """

    # Security
    SECRET_KEY: str = ""  # Must be set via environment
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Database (PostgreSQL for production, SQLite for development)
    DATABASE_URL: str = "sqlite:///./chatapi.db"
    DATABASE_ECHO: bool = False

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"

    # Seed account created by scripts/seed.py
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_EMAIL: str = "admin@chatapi.local"
    DEFAULT_ADMIN_PASSWORD: str = ""  # Must be set via environment

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
