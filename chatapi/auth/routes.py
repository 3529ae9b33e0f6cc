"""
Chat API - Authentication Routes

API endpoints for authentication:
- POST /login      - Authenticate and issue a session token
- POST /register   - Create an account and issue a session token (public)
- GET  /protected  - Echo the decoded token identity
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session as DBSession

from chatapi.auth.dependencies import get_current_user, get_db, get_token_service
from chatapi.auth.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    ProtectedResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from chatapi.auth.tokens import TokenIdentity, TokenService
from chatapi.services import users as user_service


router = APIRouter(tags=["authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Authenticate user and issue token",
)
async def login(
    credentials: LoginRequest,
    db: DBSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Authenticate user with username and password.

    Raises:
        404: Unknown username
        401: Wrong password
    """
    token = user_service.login(db, tokens, credentials.username, credentials.password)
    return LoginResponse(token=token, expires_in=tokens.expires_in)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Register a new user",
)
async def register(
    body: RegisterRequest,
    db: DBSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user, role_name, token = user_service.register(
        db,
        tokens,
        username=body.username,
        password=body.password,
        email=body.email,
        role_name=body.role_name,
    )
    return RegisterResponse(
        user=UserResponse.model_validate(user),
        role=role_name,
        token=token,
    )


@router.get("/protected", response_model=ProtectedResponse)
async def protected(user: TokenIdentity = Depends(get_current_user)):
    """Any valid token may access this route."""
    return ProtectedResponse(user=user.model_dump(mode="json"))
