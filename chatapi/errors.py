"""
Chat API - Error Taxonomy

Domain exceptions raised by services and the access control gate,
plus the FastAPI handlers that turn them into JSON responses.

Internal faults never leak details to the caller.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError


logger = logging.getLogger(__name__)


class ChatAPIError(Exception):
    """Base exception for the chat API."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class BadRequestError(ChatAPIError):
    """Missing or invalid fields, unknown role."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class UnauthorizedError(ChatAPIError):
    """Bad credentials or invalid/expired token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"


class ForbiddenError(ChatAPIError):
    """No token, insufficient role, or acting on another account."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFoundError(ChatAPIError):
    """Missing resource, or a resource the caller does not own."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(ChatAPIError):
    """Duplicate username or email."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class InternalError(ChatAPIError):
    """Persistence or unexpected fault."""


async def chatapi_error_handler(request: Request, exc: ChatAPIError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": InternalError.default_detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain and persistence error handlers to an app."""
    app.add_exception_handler(ChatAPIError, chatapi_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
