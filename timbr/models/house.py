"""
House (listing) and HouseImage models.
A listing may be represented by an agent, a seller, both or neither.
"""

from sqlalchemy import (
    String, Text, Integer, Float, Boolean, Enum as SQLEnum, Index, ForeignKey, Uuid
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from timbr.database import Base
import enum
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from timbr.models.profile import AgentProfile, SellerProfile
    from timbr.models.swipe import Swipe


class PropertyType(str, enum.Enum):
    """Property type enumeration."""
    HOUSE = "HOUSE"
    CONDO = "CONDO"
    TOWNHOME = "TOWNHOME"


class House(Base):
    """
    Listing model with pricing, specifications, address and amenity flags.
    Only active listings are shown in the feed.
    """

    __tablename__ = "houses"

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    price: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Asking price in whole currency units"
    )

    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    bathrooms: Mapped[float] = mapped_column(Float, nullable=False)

    sqft: Mapped[int] = mapped_column(Integer, nullable=False)

    lot_sqft: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    year_built: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    property_type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType, name="property_type"),
        nullable=False,
        index=True
    )

    # Address
    address_line1: Mapped[str] = mapped_column(String(255), nullable=False)
    address_line2: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(64), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(2), nullable=False, default="US")

    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Amenities
    hoa_monthly: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    has_garage: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_pool: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
        comment="Whether the listing is shown in the feed"
    )

    # Ownership
    agent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("agent_profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    seller_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("seller_profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Relationships
    agent: Mapped[Optional["AgentProfile"]] = relationship(
        "AgentProfile",
        back_populates="listings",
        lazy="selectin"
    )

    seller: Mapped[Optional["SellerProfile"]] = relationship(
        "SellerProfile",
        back_populates="listings",
        lazy="selectin"
    )

    images: Mapped[List["HouseImage"]] = relationship(
        "HouseImage",
        back_populates="house",
        cascade="all, delete-orphan",
        order_by="HouseImage.display_order",
        lazy="selectin"
    )

    swipes: Mapped[List["Swipe"]] = relationship(
        "Swipe",
        back_populates="house",
        passive_deletes=True,
        lazy="raise"
    )

    def __repr__(self) -> str:
        """String representation of the listing."""
        return f"<House(id={self.id}, title={self.title[:30]}, price={self.price})>"


class HouseImage(Base):
    """Listing photo referenced by URL, shown in ascending display order."""

    __tablename__ = "house_images"

    house_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("houses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    url: Mapped[str] = mapped_column(String(1000), nullable=False)

    caption: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    display_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Gallery position; need not be contiguous"
    )

    house: Mapped["House"] = relationship(
        "House",
        back_populates="images",
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<HouseImage(id={self.id}, house_id={self.house_id}, order={self.display_order})>"


# Feed query: active listings, newest first, with the common range filters
feed_index = Index(
    "idx_houses_active_created",
    House.is_active,
    House.created_at.desc()
)

price_bedrooms_index = Index(
    "idx_houses_price_bedrooms_active",
    House.price,
    House.bedrooms,
    House.is_active
)

type_active_index = Index(
    "idx_houses_type_active",
    House.property_type,
    House.is_active,
    House.created_at.desc()
)
