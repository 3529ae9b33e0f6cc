"""
Chat API - Message Service

Creation and listing require the caller to own the parent chat.
Update and deletion require the caller to be the message's author, which
is narrower than chat ownership: a chat owner cannot edit or delete a
message written by somebody else.
"""

from typing import List

from sqlalchemy import delete, update
from sqlmodel import Session as DBSession, select

from chatapi.db.models import Chat, Message
from chatapi.errors import NotFoundError


CHAT_NOT_FOUND = "Chat not found or user not authorized"
MESSAGE_NOT_FOUND = "Message not found"


def _require_owned_chat(db: DBSession, caller_id: int, chat_id: int) -> None:
    chat_id_row = db.exec(
        select(Chat.id).where(Chat.id == chat_id, Chat.user_id == caller_id)
    ).first()
    if chat_id_row is None:
        raise NotFoundError(CHAT_NOT_FOUND)


def create_message(db: DBSession, caller_id: int, chat_id: int, content: str) -> Message:
    _require_owned_chat(db, caller_id, chat_id)

    message = Message(chat_id=chat_id, user_id=caller_id, content=content)
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


def list_messages(db: DBSession, caller_id: int, chat_id: int) -> List[Message]:
    _require_owned_chat(db, caller_id, chat_id)

    statement = select(Message).where(Message.chat_id == chat_id).order_by(Message.id)
    return list(db.exec(statement).all())


def update_message(db: DBSession, caller_id: int, message_id: int, content: str) -> Message:
    result = db.exec(
        update(Message)
        .where(Message.id == message_id, Message.user_id == caller_id)
        .values(content=content)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(MESSAGE_NOT_FOUND)

    db.commit()
    return db.get(Message, message_id)


def delete_message(db: DBSession, caller_id: int, message_id: int) -> None:
    result = db.exec(
        delete(Message).where(Message.id == message_id, Message.user_id == caller_id)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(MESSAGE_NOT_FOUND)
    db.commit()
