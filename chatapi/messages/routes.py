"""
Chat API - Message Routes

- POST   /messages            - Post into a chat the caller owns
- GET    /messages?chat_id=   - List a chat the caller owns
- PUT    /messages/{id}       - Edit a message the caller wrote
- DELETE /messages/{id}       - Delete a message the caller wrote
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel, Field
from sqlmodel import Session as DBSession

from chatapi.auth.dependencies import get_current_user, get_db
from chatapi.auth.schemas import ErrorResponse, MessageOnlyResponse
from chatapi.auth.tokens import TokenIdentity
from chatapi.services import messages as message_service


router = APIRouter(prefix="/messages", tags=["messages"])


class MessageCreateRequest(BaseModel):
    chat_id: int
    content: str = Field(..., min_length=1)


class MessageUpdateRequest(BaseModel):
    content: str = Field(..., min_length=1)


class MessageData(BaseModel):
    id: int
    chat_id: int
    user_id: int
    content: str

    class Config:
        from_attributes = True


class MessageEnvelope(BaseModel):
    message: str
    messageData: MessageData


class MessageListEnvelope(BaseModel):
    message: str
    messageData: List[MessageData]


@router.post(
    "",
    response_model=MessageEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_message(
    body: MessageCreateRequest,
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    message = message_service.create_message(db, user.user_id, body.chat_id, body.content)
    return MessageEnvelope(
        message="Message created successfully",
        messageData=MessageData.model_validate(message),
    )


@router.get("", response_model=MessageListEnvelope, responses={404: {"model": ErrorResponse}})
async def list_messages(
    chat_id: int = Query(...),
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    messages = message_service.list_messages(db, user.user_id, chat_id)
    return MessageListEnvelope(
        message="Messages retrieved successfully",
        messageData=[MessageData.model_validate(m) for m in messages],
    )


@router.put("/{message_id}", response_model=MessageEnvelope, responses={404: {"model": ErrorResponse}})
async def update_message(
    body: MessageUpdateRequest,
    message_id: int = Path(...),
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    message = message_service.update_message(db, user.user_id, message_id, body.content)
    return MessageEnvelope(
        message="Message updated successfully",
        messageData=MessageData.model_validate(message),
    )


@router.delete("/{message_id}", response_model=MessageOnlyResponse, responses={404: {"model": ErrorResponse}})
async def delete_message(
    message_id: int = Path(...),
    db: DBSession = Depends(get_db),
    user: TokenIdentity = Depends(get_current_user),
):
    message_service.delete_message(db, user.user_id, message_id)
    return MessageOnlyResponse(message="Message deleted successfully")
