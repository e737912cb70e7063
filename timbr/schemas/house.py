"""
Pydantic schemas for listings, their images and their owners.
"""

from pydantic import Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from timbr.models.house import PropertyType
from timbr.schemas.common import CamelModel
from timbr.schemas.user import UserPublic


class HouseImageResponse(CamelModel):
    """Listing photo."""

    id: UUID
    url: str
    caption: Optional[str] = None
    display_order: int = Field(..., alias="order", description="Gallery position")


class AgentSummary(CamelModel):
    """Agent attached to a listing."""

    id: UUID
    license_no: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    brokerage: Optional[str] = None
    rating: Optional[float] = None
    user: UserPublic


class SellerSummary(CamelModel):
    """Seller attached to a listing."""

    id: UUID
    user: UserPublic


class HouseBase(CamelModel):
    """Listing fields shared by every listing representation."""

    id: UUID
    title: str
    description: Optional[str] = None
    price: int = Field(..., examples=[650000])
    bedrooms: int
    bathrooms: float
    sqft: int
    lot_sqft: Optional[int] = None
    year_built: Optional[int] = None
    property_type: PropertyType
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    state: str
    postal_code: str
    country: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    hoa_monthly: Optional[int] = None
    has_garage: bool
    has_pool: bool
    is_active: bool
    agent_id: Optional[UUID] = None
    seller_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime
    images: List[HouseImageResponse] = Field(default_factory=list)


class HouseResponse(HouseBase):
    """Listing with its owners."""

    agent: Optional[AgentSummary] = None
    seller: Optional[SellerSummary] = None


class HouseListResponse(CamelModel):
    """One page of the listing feed."""

    houses: List[HouseResponse]


class HouseDetailResponse(CamelModel):
    house: HouseResponse
