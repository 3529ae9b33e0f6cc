"""
Chat API - Chat Service

Every read and mutation is scoped by ``user_id = caller`` inside the
statement itself. A chat owned by someone else is reported exactly like
a chat that does not exist.
"""

import logging
from typing import List

from sqlalchemy import delete, update
from sqlmodel import Session as DBSession, select

from chatapi.db.models import Chat, Message
from chatapi.errors import NotFoundError


logger = logging.getLogger(__name__)

CHAT_NOT_FOUND = "Chat not found or you are not authorized"


def create_chat(db: DBSession, caller_id: int, title: str) -> Chat:
    chat = Chat(user_id=caller_id, title=title)
    db.add(chat)
    db.commit()
    db.refresh(chat)
    return chat


def list_chats(db: DBSession, caller_id: int) -> List[Chat]:
    statement = select(Chat).where(Chat.user_id == caller_id).order_by(Chat.id)
    return list(db.exec(statement).all())


def get_chat(db: DBSession, caller_id: int, chat_id: int) -> Chat:
    chat = db.exec(
        select(Chat).where(Chat.id == chat_id, Chat.user_id == caller_id)
    ).first()
    if chat is None:
        raise NotFoundError(CHAT_NOT_FOUND)
    return chat


def update_chat(db: DBSession, caller_id: int, chat_id: int, title: str) -> Chat:
    """
    Rename a chat the caller owns.

    Raises:
        NotFoundError: No chat with this id owned by the caller
    """
    result = db.exec(
        update(Chat)
        .where(Chat.id == chat_id, Chat.user_id == caller_id)
        .values(title=title)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(CHAT_NOT_FOUND)

    db.commit()
    return get_chat(db, caller_id, chat_id)


def delete_chat(db: DBSession, caller_id: int, chat_id: int) -> None:
    """
    Delete a chat the caller owns, together with its messages.

    Raises:
        NotFoundError: No chat with this id owned by the caller
    """
    owned = select(Chat.id).where(Chat.id == chat_id, Chat.user_id == caller_id)

    try:
        db.exec(
            delete(Message)
            .where(Message.chat_id.in_(owned))
            .execution_options(synchronize_session=False)
        )
        result = db.exec(delete(Chat).where(Chat.id == chat_id, Chat.user_id == caller_id))
        if result.rowcount == 0:
            raise NotFoundError(CHAT_NOT_FOUND)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("User %s deleted chat %s", caller_id, chat_id)
