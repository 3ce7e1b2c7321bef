"""Appending and reading conversation messages."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from classifieds.core.errors import NotFoundError, ValidationError
from classifieds.models import MESSAGE_MAX_LENGTH, Conversation, Message, User
from classifieds.schemas.conversation import MessageResponse

logger = logging.getLogger(__name__)


def send_message(db: Session, text: str, sender_id: int, conversation_id: int) -> Message:
    """Append a message to a conversation.

    The sender is not required to be a participant of the conversation.

    Raises:
        ValidationError: If the text is empty or longer than
            ``MESSAGE_MAX_LENGTH`` characters, or the sender or conversation
            does not exist.
    """
    problems: dict[str, str] = {}
    if not text:
        problems["message"] = "is required"
    elif len(text) > MESSAGE_MAX_LENGTH:
        problems["message"] = f"must be at most {MESSAGE_MAX_LENGTH} characters"
    if db.get(User, sender_id) is None:
        problems["name"] = "does not exist"
    if db.get(Conversation, conversation_id) is None:
        problems["conversation"] = "does not exist"
    if problems:
        raise ValidationError("Could not save message", errors=problems)

    message = Message(message=text, sender_id=sender_id, conversation_id=conversation_id)
    db.add(message)
    db.commit()
    db.refresh(message)
    logger.debug("Stored message %d in conversation %d", message.id, conversation_id)
    return message


def list_messages(db: Session, conversation_id: int) -> list[MessageResponse]:
    """Return all messages of a conversation, oldest first.

    Sender names are resolved at read time, so a renamed user shows up under
    the current name in the whole history.
    """
    rows = (
        db.query(Message, User.name)
        .outerjoin(User, Message.sender_id == User.id)
        .filter(Message.conversation_id == conversation_id)
        .order_by(Message.created_at.asc(), Message.id.asc())
        .all()
    )
    if any(sender_name is None for _, sender_name in rows):
        raise NotFoundError("Sender not found")
    return [
        MessageResponse(
            id=message.id,
            message=message.message,
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            sender_name=sender_name,
            created_at=message.created_at,
        )
        for message, sender_name in rows
    ]
