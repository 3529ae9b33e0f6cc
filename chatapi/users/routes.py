"""
Chat API - User Routes

Endpoints any authenticated user may call. Profile mutation is limited
to the caller's own account.
"""

from fastapi import APIRouter, Depends, Path
from sqlmodel import Session as DBSession

from chatapi.auth.dependencies import get_current_user, get_db
from chatapi.auth.schemas import (
    ErrorResponse,
    MessageOnlyResponse,
    ProfileUpdateRequest,
    UserResponse,
    UserUpdateResponse,
)
from chatapi.auth.tokens import TokenIdentity
from chatapi.services import users as user_service


router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_user(
    user_id: int = Path(...),
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    return UserResponse.model_validate(user_service.get_user(db, user_id))


@router.put(
    "/profile/{user_id}",
    response_model=UserUpdateResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update own profile",
)
async def update_profile(
    body: ProfileUpdateRequest,
    user_id: int = Path(...),
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    updated = user_service.update_profile(
        db, user.user_id, user_id, username=body.username, email=body.email
    )
    return UserUpdateResponse(
        message="Profile updated successfully",
        user=UserResponse.model_validate(updated),
    )


@router.delete(
    "/profile/{user_id}",
    response_model=MessageOnlyResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete own account",
)
async def delete_account(
    user_id: int = Path(...),
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    user_service.delete_account(db, user.user_id, user_id)
    return MessageOnlyResponse(message="User and related data deleted successfully")
