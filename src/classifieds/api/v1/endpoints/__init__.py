# src/classifieds/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .conversations import router as conversations_router
from .messages import router as messages_router
from .posts import router as posts_router
from .system import router as system_router
from .users import router as users_router

__all__ = [
    "conversations_router",
    "messages_router",
    "posts_router",
    "system_router",
    "users_router",
]
