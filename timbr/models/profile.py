"""
Role profile models.
One table per role; each profile is one-to-one with its user.
"""

from sqlalchemy import String, Text, Float, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from timbr.database import Base
from timbr.models.user import UserRole
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from timbr.models.user import User
    from timbr.models.house import House
    from timbr.models.preference import BuyerPreference


class AgentProfile(Base):
    """Agent profile with reputation and brokerage metadata."""

    __tablename__ = "agent_profiles"

    role = UserRole.AGENT

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    license_no: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    brokerage: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    rating: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
        comment="Average rating on a 0-5 scale"
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="agent_profile",
        lazy="selectin"
    )

    # Loaded explicitly by the agent lookup
    listings: Mapped[List["House"]] = relationship(
        "House",
        back_populates="agent",
        order_by="House.created_at.desc()",
        lazy="raise"
    )


class SellerProfile(Base):
    """Seller profile. Carries no data beyond its listings."""

    __tablename__ = "seller_profiles"

    role = UserRole.SELLER

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="seller_profile",
        lazy="selectin"
    )

    listings: Mapped[List["House"]] = relationship(
        "House",
        back_populates="seller",
        lazy="raise"
    )


class BuyerProfile(Base):
    """Buyer profile. Owns the buyer's single preference record."""

    __tablename__ = "buyer_profiles"

    role = UserRole.BUYER

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="buyer_profile",
        lazy="selectin"
    )

    preferences: Mapped[Optional["BuyerPreference"]] = relationship(
        "BuyerPreference",
        back_populates="buyer",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin"
    )


PROFILE_MODELS = {
    UserRole.AGENT: AgentProfile,
    UserRole.SELLER: SellerProfile,
    UserRole.BUYER: BuyerProfile,
}
