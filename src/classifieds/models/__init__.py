# src/classifieds/models/__init__.py
"""SQLAlchemy models for the classifieds application."""

from .ad import Ad
from .conversation import (
    CONVERSATION_STATUS_OPEN,
    MESSAGE_MAX_LENGTH,
    Conversation,
    Message,
)
from .user import User

__all__ = [
    "Ad",
    "Conversation", "Message",
    "CONVERSATION_STATUS_OPEN", "MESSAGE_MAX_LENGTH",
    "User",
]
