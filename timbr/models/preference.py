"""
Buyer preference model.
Every criterion is optional; a null column means "no constraint".
"""

from sqlalchemy import Integer, Float, Boolean, JSON, ForeignKey, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from timbr.database import Base
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from timbr.models.profile import BuyerProfile

# JSONB on PostgreSQL, plain JSON elsewhere
JSONList = JSON().with_variant(JSONB(), "postgresql")

# Columns a buyer may set through the preference store
PREFERENCE_FIELDS = (
    "min_price",
    "max_price",
    "min_beds",
    "max_beds",
    "min_baths",
    "max_baths",
    "min_sqft",
    "max_sqft",
    "min_lot_sqft",
    "max_lot_sqft",
    "year_built_min",
    "year_built_max",
    "property_types",
    "neighborhoods",
    "hoa_max_monthly",
    "has_garage",
    "has_pool",
    "allow_fixer_upper",
)


class BuyerPreference(Base):
    """Declared matching criteria of a buyer, one row per buyer profile."""

    __tablename__ = "buyer_preferences"

    buyer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("buyer_profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    # Range bounds
    min_price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    max_price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    min_beds: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    max_beds: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    min_baths: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    max_baths: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    min_sqft: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    max_sqft: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    min_lot_sqft: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    max_lot_sqft: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    year_built_min: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    year_built_max: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Set-valued filters
    property_types: Mapped[Optional[List[str]]] = mapped_column(JSONList, nullable=True)
    neighborhoods: Mapped[Optional[List[str]]] = mapped_column(JSONList, nullable=True)

    hoa_max_monthly: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Must-have flags
    has_garage: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    has_pool: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    allow_fixer_upper: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    buyer: Mapped["BuyerProfile"] = relationship(
        "BuyerProfile",
        back_populates="preferences",
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<BuyerPreference(id={self.id}, buyer_id={self.buyer_id})>"
