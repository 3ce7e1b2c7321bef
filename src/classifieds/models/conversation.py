"""SQLAlchemy models for buyer/seller conversations and their messages."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classifieds.db.session import Base
from classifieds.db.time import utcnow
from classifieds.models.ad import Ad
from classifieds.models.user import User

# Conversation status codes. Set once at creation; no operation transitions it.
CONVERSATION_STATUS_OPEN = 1

MESSAGE_MAX_LENGTH = 140


class Conversation(Base):
    """Thread between exactly one buyer and one seller about one ad."""

    __tablename__ = "conversation"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    # Nulled when the ad is deleted; conversations themselves are never deleted.
    ad_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("ad.id", ondelete="SET NULL"),
        nullable=True,
    )
    seller_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id"), nullable=False, index=True
    )
    buyer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id"), nullable=False, index=True
    )
    status: Mapped[int] = mapped_column(default=CONVERSATION_STATUS_OPEN, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    ad: Mapped[Ad | None] = relationship("Ad")
    seller: Mapped[User] = relationship("User", foreign_keys=[seller_id])
    buyer: Mapped[User] = relationship("User", foreign_keys=[buyer_id])


class Message(Base):
    """Immutable text message posted into a conversation."""

    __tablename__ = "message"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message: Mapped[str] = mapped_column(String(MESSAGE_MAX_LENGTH), nullable=False)
    sender_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id"), nullable=False
    )
    conversation_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("conversation.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    sender: Mapped[User] = relationship("User")
