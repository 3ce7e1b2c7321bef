"""Conversation and message Pydantic schemas."""

from pydantic import Field

from classifieds.models.conversation import MESSAGE_MAX_LENGTH
from classifieds.schemas.ad import AdSummary
from classifieds.schemas.common import CamelModel, UserRef, UtcDatetime


class ConversationCreate(CamelModel):
    """Schema for opening a conversation about an ad."""

    name: str = Field(..., min_length=1)
    ad_id: int
    seller_id: int
    buyer_id: int


class ConversationResponse(CamelModel):
    """A stored conversation."""

    id: int
    name: str
    ad_id: int | None
    seller_id: int
    buyer_id: int
    status: int
    created_at: UtcDatetime


class ConversationEntry(ConversationResponse):
    """A conversation with its ad and both participants resolved."""

    ad: AdSummary | None
    seller: UserRef
    buyer: UserRef


class ConversationList(CamelModel):
    """Conversations of one user, split by the role they play."""

    seller_conversations: list[ConversationEntry]
    buyer_conversations: list[ConversationEntry]


class MessageCreate(CamelModel):
    """Schema for posting a message; wire names follow the stored references."""

    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)
    name: int = Field(..., description="Sender user id")
    conversation: int = Field(..., description="Conversation id")


class MessageSent(CamelModel):
    """Acknowledgement returned after a message is stored."""

    success: bool = True
    message_id: int


class MessageResponse(CamelModel):
    """A message with its sender resolved to the current display name."""

    id: int
    message: str
    conversation_id: int
    sender_id: int
    sender_name: str
    created_at: UtcDatetime


class ConversationDetail(CamelModel):
    """Ad summary and full message history of one conversation."""

    info: AdSummary
    messages: list[MessageResponse]
