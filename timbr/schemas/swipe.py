"""
Pydantic schemas for swipe recording.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime
from uuid import UUID
from timbr.models.swipe import SwipeDirection
from timbr.schemas.common import CamelModel, MAX_INT32


class SwipeCreate(CamelModel):
    """Swipe request. Direction is LEFT or RIGHT; nothing else is accepted."""

    house_id: UUID = Field(..., description="Listing being decided on")
    direction: SwipeDirection = Field(..., examples=["RIGHT"])
    dwell_ms: Optional[int] = Field(
        None,
        ge=0,
        le=MAX_INT32,
        description="Milliseconds the listing was shown before the decision",
    )


class SwipeResponse(CamelModel):
    id: UUID
    user_id: UUID
    house_id: UUID
    direction: SwipeDirection
    dwell_ms: Optional[int] = None
    created_at: datetime


class SwipeEnvelope(CamelModel):
    swipe: SwipeResponse
