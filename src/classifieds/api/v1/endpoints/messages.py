# src/classifieds/api/v1/endpoints/messages.py
"""Message endpoints for the classifieds API."""

from __future__ import annotations

from fastapi import APIRouter

from classifieds.api.v1.dependencies import CurrentUserDep, SessionDep
from classifieds.schemas.conversation import MessageCreate, MessageSent
from classifieds.services import messages as message_service

router = APIRouter(tags=["messages"])


@router.post("/message", response_model=MessageSent)
def send_message(
    payload: MessageCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageSent:
    """Append a message to a conversation.

    ``name`` carries the sender's user id; it is not checked against the
    caller or the conversation's participants.
    """
    message = message_service.send_message(db, payload.message, payload.name, payload.conversation)
    return MessageSent(message_id=message.id)
