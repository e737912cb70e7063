"""
Swipe model: a user's one-time LEFT/RIGHT decision on a listing.
"""

from sqlalchemy import Integer, Enum as SQLEnum, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from timbr.database import Base
import enum
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from timbr.models.user import User
    from timbr.models.house import House


class SwipeDirection(str, enum.Enum):
    """LEFT passes on a listing, RIGHT likes it."""
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class Swipe(Base):
    """
    Append-only interaction log entry.
    The (user_id, house_id) pair is unique at the storage layer, so concurrent
    duplicate submissions cannot both be written.
    """

    __tablename__ = "swipes"
    __table_args__ = (
        UniqueConstraint("user_id", "house_id", name="uq_swipes_user_house"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    house_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("houses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    direction: Mapped[SwipeDirection] = mapped_column(
        SQLEnum(SwipeDirection, name="swipe_direction"),
        nullable=False
    )

    dwell_ms: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Milliseconds the listing was shown before the decision"
    )

    user: Mapped["User"] = relationship("User", back_populates="swipes", lazy="raise")
    house: Mapped["House"] = relationship("House", back_populates="swipes", lazy="raise")

    def __repr__(self) -> str:
        return f"<Swipe(user_id={self.user_id}, house_id={self.house_id}, direction={self.direction})>"
