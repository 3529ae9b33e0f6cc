"""
Chat API - FastAPI Application Entrypoint

This module builds the FastAPI application with:
- CORS and security middleware
- Authentication, user, admin, chat and message routes
- Database lifecycle management
- Domain error handlers

Run with: uvicorn chatapi.app:app
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatapi.config import Settings, settings as default_settings
from chatapi.logging_config import configure_logging
from chatapi.gateway.middleware import SecurityMiddleware
from chatapi.db.database import get_engine, init_db, get_session_factory
from chatapi.auth.tokens import TokenService
from chatapi.errors import register_exception_handlers
from chatapi.auth.routes import router as auth_router
from chatapi.admin.routes import router as admin_router
from chatapi.users.routes import router as users_router
from chatapi.chats.routes import router as chats_router
from chatapi.messages.routes import router as messages_router


logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_app(config: Optional[Settings] = None, engine=None) -> FastAPI:
    """
    Build the application.

    Args:
        config: Settings to use (defaults to the environment-loaded settings)
        engine: Pre-built SQLAlchemy engine; created from DATABASE_URL if omitted
    """
    config = config or default_settings
    configure_logging(config.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
            - Create the engine (unless one was supplied)
            - Create tables and seed the role registry
        Shutdown:
            - Dispose of an engine this app created
        """
        owns_engine = engine is None
        db_engine = engine if engine is not None else get_engine(config.DATABASE_URL, echo=config.DATABASE_ECHO)
        init_db(db_engine)
        app.state.db_engine = db_engine
        app.state.db_session_factory = get_session_factory(db_engine)
        logger.info("Database ready")

        yield

        if owns_engine:
            db_engine.dispose()

    app = FastAPI(
        title="Chat API",
        description="Multi-tenant chat backend with JWT authentication and RBAC",
        version=VERSION,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.tokens = TokenService(
        secret_key=config.SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
        expire_minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "PUT"],
        allow_headers=["Authorization", "Content-Type"],
    )

    # Security middleware for request ids, headers and access logging
    app.add_middleware(SecurityMiddleware)

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(users_router)
    app.include_router(chats_router)
    app.include_router(messages_router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": VERSION}

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Chat API",
            "version": VERSION,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
