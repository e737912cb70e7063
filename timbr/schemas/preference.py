"""
Pydantic schemas for buyer preferences.
"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from timbr.models.house import PropertyType
from timbr.schemas.common import CamelModel, MAX_INT32


class PreferenceFields(CamelModel):
    """All preference criteria. None means no constraint."""

    min_price: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    max_price: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    min_beds: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    max_beds: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    min_baths: Optional[float] = Field(None, ge=0)
    max_baths: Optional[float] = Field(None, ge=0)
    min_sqft: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    max_sqft: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    min_lot_sqft: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    max_lot_sqft: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    year_built_min: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    year_built_max: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    property_types: Optional[List[PropertyType]] = None
    neighborhoods: Optional[List[str]] = None
    hoa_max_monthly: Optional[int] = Field(None, ge=0, le=MAX_INT32)
    has_garage: Optional[bool] = None
    has_pool: Optional[bool] = None
    allow_fixer_upper: Optional[bool] = None


class PreferenceUpdate(PreferenceFields):
    """
    Partial update body.
    Only the keys the client sends are written; use model_dump(exclude_unset=True).
    """

    @field_validator("property_types", "neighborhoods")
    @classmethod
    def deduplicate(cls, v):
        """Set-valued fields keep first-seen order without repeats."""
        if v is None:
            return v
        return list(dict.fromkeys(v))

    def to_columns(self) -> dict:
        """Fields present in the request, as column values."""
        data = self.model_dump(exclude_unset=True)
        if data.get("property_types") is not None:
            data["property_types"] = [PropertyType(t).value for t in data["property_types"]]
        return data


class PreferenceResponse(PreferenceFields):
    id: UUID
    buyer_id: UUID
    created_at: datetime
    updated_at: datetime


class PreferenceEnvelope(CamelModel):
    preferences: PreferenceResponse
