# src/classifieds/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .ad import AdCreate, AdDeleted, AdResponse, AdSummary, EnrichedAdResponse
from .common import CamelModel, UserRef, UtcDatetime
from .conversation import (
    ConversationCreate,
    ConversationDetail,
    ConversationEntry,
    ConversationList,
    ConversationResponse,
    MessageCreate,
    MessageResponse,
    MessageSent,
)
from .user import LoginRequest, RegisterRequest, SellerResponse, SessionResponse

__all__ = [
    "AdCreate", "AdDeleted", "AdResponse", "AdSummary", "EnrichedAdResponse",
    "CamelModel", "UserRef", "UtcDatetime",
    "ConversationCreate", "ConversationDetail", "ConversationEntry",
    "ConversationList", "ConversationResponse",
    "MessageCreate", "MessageResponse", "MessageSent",
    "LoginRequest", "RegisterRequest", "SellerResponse", "SessionResponse",
]
