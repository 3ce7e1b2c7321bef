"""SQLAlchemy model for marketplace listings."""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classifieds.db.session import Base
from classifieds.db.time import utcnow
from classifieds.models.user import User


class Ad(Base):
    """A listing posted on behalf of a seller.

    The seller is a reference, not ownership: many ads may point at one user
    and nothing ties the posting caller to the seller.
    """

    __tablename__ = "ad"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    info: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    delivery: Mapped[str] = mapped_column(Text, nullable=False)

    # Reference into the image store.
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    image_id: Mapped[str] = mapped_column(Text, nullable=False)

    seller_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )

    seller: Mapped[User] = relationship("User")
