# src/classifieds/api/v1/endpoints/conversations.py
"""Conversation endpoints for the classifieds API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from classifieds.api.v1.dependencies import CurrentUserDep, SessionDep
from classifieds.schemas.conversation import (
    ConversationCreate,
    ConversationDetail,
    ConversationList,
    ConversationResponse,
)
from classifieds.services import conversations as conversation_service

router = APIRouter(tags=["conversations"])


@router.post(
    "/conversation",
    response_model=ConversationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_conversation(
    payload: ConversationCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ConversationResponse:
    """Open a conversation between a buyer and the seller of an ad."""
    conversation = conversation_service.create_conversation(db, payload)
    return ConversationResponse.model_validate(conversation)


@router.get("/conversations", response_model=ConversationList)
def list_conversations(
    current_user: CurrentUserDep,
    db: SessionDep,
    user_id: int = Query(..., alias="userId", description="Participant to list conversations for"),
) -> ConversationList:
    """List a user's conversations split into seller and buyer roles."""
    as_seller, as_buyer = conversation_service.list_conversations(db, user_id)
    return ConversationList(seller_conversations=as_seller, buyer_conversations=as_buyer)


@router.get("/conversation/{conversation_id}", response_model=ConversationDetail)
def get_conversation(
    conversation_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ConversationDetail:
    """Return the ad summary and message history of a conversation."""
    info, messages = conversation_service.get_conversation_detail(db, conversation_id)
    return ConversationDetail(info=info, messages=messages)
