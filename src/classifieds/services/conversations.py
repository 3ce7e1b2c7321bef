"""Buyer/seller conversations about an ad."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session, selectinload

from classifieds.core.errors import NotFoundError, ValidationError
from classifieds.models import CONVERSATION_STATUS_OPEN, Ad, Conversation, User
from classifieds.schemas.ad import AdSummary
from classifieds.schemas.common import UserRef
from classifieds.schemas.conversation import (
    ConversationCreate,
    ConversationEntry,
    ConversationResponse,
    MessageResponse,
)
from classifieds.services.ads import summarize_ad
from classifieds.services.credentials import get_user
from classifieds.services.messages import list_messages

logger = logging.getLogger(__name__)


def create_conversation(db: Session, payload: ConversationCreate) -> Conversation:
    """Open a conversation between a seller and a buyer about an ad.

    Only existence of the referenced rows is checked: the seller need not
    be the ad's seller and buyer and seller may be the same user.

    Raises:
        ValidationError: If the ad, seller or buyer does not exist.
    """
    problems: dict[str, str] = {}
    if db.get(Ad, payload.ad_id) is None:
        problems["adId"] = "does not exist"
    if db.get(User, payload.seller_id) is None:
        problems["sellerId"] = "does not exist"
    if db.get(User, payload.buyer_id) is None:
        problems["buyerId"] = "does not exist"
    if problems:
        raise ValidationError("Could not create conversation", errors=problems)

    conversation = Conversation(
        name=payload.name,
        ad_id=payload.ad_id,
        seller_id=payload.seller_id,
        buyer_id=payload.buyer_id,
        status=CONVERSATION_STATUS_OPEN,
    )
    db.add(conversation)
    db.commit()
    db.refresh(conversation)
    logger.info(
        "Opened conversation %d on ad %d (seller %d, buyer %d)",
        conversation.id,
        payload.ad_id,
        payload.seller_id,
        payload.buyer_id,
    )
    return conversation


def _to_entry(conversation: Conversation) -> ConversationEntry:
    return ConversationEntry(
        **ConversationResponse.model_validate(conversation).model_dump(),
        ad=summarize_ad(conversation.ad) if conversation.ad is not None else None,
        seller=UserRef.model_validate(conversation.seller),
        buyer=UserRef.model_validate(conversation.buyer),
    )


def _conversations(db: Session, *criteria) -> Sequence[Conversation]:
    return (
        db.query(Conversation)
        .options(
            selectinload(Conversation.ad),
            selectinload(Conversation.seller),
            selectinload(Conversation.buyer),
        )
        .filter(*criteria)
        .order_by(Conversation.created_at.desc(), Conversation.id.desc())
        .all()
    )


def list_conversations(
    db: Session, participant_id: int
) -> tuple[list[ConversationEntry], list[ConversationEntry]]:
    """Return ``(as_seller, as_buyer)`` conversations of a user, newest first.

    The two lists are disjoint. A conversation where the user is both seller
    and buyer is reported only in ``as_seller``.

    Raises:
        NotFoundError: If the participant does not exist.
    """
    get_user(db, participant_id)
    as_seller = _conversations(db, Conversation.seller_id == participant_id)
    as_buyer = _conversations(
        db,
        Conversation.buyer_id == participant_id,
        Conversation.seller_id != participant_id,
    )
    return [_to_entry(c) for c in as_seller], [_to_entry(c) for c in as_buyer]


def get_conversation(db: Session, conversation_id: int) -> Conversation:
    """Return a conversation by id or raise ``NotFoundError``."""
    conversation = db.get(Conversation, conversation_id)
    if conversation is None:
        raise NotFoundError("Conversation not found")
    return conversation


def get_conversation_detail(
    db: Session, conversation_id: int
) -> tuple[AdSummary, list[MessageResponse]]:
    """Return the ad summary and chronological messages of a conversation.

    Raises:
        NotFoundError: If the conversation or its ad no longer exists.
    """
    conversation = get_conversation(db, conversation_id)
    if conversation.ad is None:
        raise NotFoundError("Ad not found")
    return summarize_ad(conversation.ad), list_messages(db, conversation.id)
