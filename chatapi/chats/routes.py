"""
Chat API - Chat Routes

CRUD on the caller's own chats. Ownership is enforced in the service
layer; any chat the caller does not own answers 404.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel, Field
from sqlmodel import Session as DBSession

from chatapi.auth.dependencies import get_current_user, get_db
from chatapi.auth.schemas import ErrorResponse, MessageOnlyResponse
from chatapi.auth.tokens import TokenIdentity
from chatapi.services import chats as chat_service


router = APIRouter(prefix="/chats", tags=["chats"])


class ChatRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)


class ChatResponse(BaseModel):
    id: int
    user_id: int
    title: str

    class Config:
        from_attributes = True


@router.post("", response_model=ChatResponse, status_code=status.HTTP_201_CREATED)
async def create_chat(
    body: ChatRequest,
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    return ChatResponse.model_validate(chat_service.create_chat(db, user.user_id, body.title))


@router.get("", response_model=List[ChatResponse])
async def list_chats(
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    return [ChatResponse.model_validate(c) for c in chat_service.list_chats(db, user.user_id)]


@router.get("/{chat_id}", response_model=ChatResponse, responses={404: {"model": ErrorResponse}})
async def get_chat(
    chat_id: int = Path(...),
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    return ChatResponse.model_validate(chat_service.get_chat(db, user.user_id, chat_id))


@router.put("/{chat_id}", response_model=ChatResponse, responses={404: {"model": ErrorResponse}})
async def update_chat(
    body: ChatRequest,
    chat_id: int = Path(...),
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    chat = chat_service.update_chat(db, user.user_id, chat_id, body.title)
    return ChatResponse.model_validate(chat)


@router.delete("/{chat_id}", response_model=MessageOnlyResponse, responses={404: {"model": ErrorResponse}})
async def delete_chat(
    chat_id: int = Path(...),
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    chat_service.delete_chat(db, user.user_id, chat_id)
    return MessageOnlyResponse(message="Chat deleted successfully")
