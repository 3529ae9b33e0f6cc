"""
Chat API - Admin Routes

Admin-only user management:
- GET    /users       - List all users
- PUT    /users/{id}  - Update any user (including role)
- DELETE /users/{id}  - Delete any user and related data

All routes require the ADMIN role. The role gate is the only admin check;
the service layer acts on the id alone.
"""

from typing import List

from fastapi import APIRouter, Depends, Path
from sqlmodel import Session as DBSession

from chatapi.auth.dependencies import get_db, require_roles
from chatapi.auth.schemas import (
    AdminUserUpdateRequest,
    ErrorResponse,
    MessageOnlyResponse,
    UserResponse,
    UserUpdateResponse,
)
from chatapi.auth.tokens import TokenIdentity
from chatapi.db.models import Role
from chatapi.services import users as user_service


router = APIRouter(prefix="/users", tags=["admin"])

require_admin = require_roles(Role.ADMIN)


@router.get("", response_model=List[UserResponse])
async def list_users(
    db: DBSession = Depends(get_db),
    admin: TokenIdentity = Depends(require_admin),
):
    return [UserResponse.model_validate(u) for u in user_service.list_users(db)]


@router.put(
    "/{user_id}",
    response_model=UserUpdateResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_any_user(
    body: AdminUserUpdateRequest,
    user_id: int = Path(...),
    db: DBSession = Depends(get_db),
    admin: TokenIdentity = Depends(require_admin),
):
    updated = user_service.update_any_user(
        db, user_id, username=body.username, email=body.email, role=body.role
    )
    return UserUpdateResponse(
        message="User updated successfully",
        user=UserResponse.model_validate(updated),
    )


@router.delete(
    "/{user_id}",
    response_model=MessageOnlyResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_any_user(
    user_id: int = Path(...),
    db: DBSession = Depends(get_db),
    admin: TokenIdentity = Depends(require_admin),
):
    user_service.delete_any_user(db, user_id)
    return MessageOnlyResponse(message="User and related data deleted successfully")
