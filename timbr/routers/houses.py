"""
Listing endpoints: the swipe feed and listing detail.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import Optional

from timbr.config import settings
from timbr.models.house import PropertyType
from timbr.repositories.house import HouseSearchFilters
from timbr.services.house import HouseService
from timbr.schemas.house import HouseResponse, HouseListResponse, HouseDetailResponse
from timbr.schemas.error import get_error_responses
from timbr.schemas.common import MAX_INT32
from timbr.utils.dependencies import get_house_service


router = APIRouter(prefix="/houses", tags=["Houses"])


@router.get(
    "",
    response_model=HouseListResponse,
    status_code=status.HTTP_200_OK,
    summary="Listing feed",
    description="Active listings, newest first, with optional price, bedroom and type filters",
    responses=get_error_responses(400)
)
async def list_houses(
    take: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Page size"),
    skip: int = Query(0, ge=0, le=MAX_INT32, description="Listings to skip"),
    min_price: Optional[int] = Query(None, alias="minPrice", ge=0, le=MAX_INT32),
    max_price: Optional[int] = Query(None, alias="maxPrice", ge=0, le=MAX_INT32),
    min_beds: Optional[int] = Query(None, alias="minBeds", ge=0, le=MAX_INT32),
    max_beds: Optional[int] = Query(None, alias="maxBeds", ge=0, le=MAX_INT32),
    property_type: Optional[PropertyType] = Query(None, alias="propertyType"),
    house_service: HouseService = Depends(get_house_service)
) -> HouseListResponse:
    """
    Get one page of the listing feed.

    Args:
        take: Page size
        skip: Offset into the feed
        min_price: Inclusive lower price bound
        max_price: Inclusive upper price bound
        min_beds: Inclusive lower bedroom bound
        max_beds: Inclusive upper bedroom bound
        property_type: Exact property type
        house_service: Listing service

    Returns:
        Page of listings with images and owners
    """
    filters = HouseSearchFilters(
        min_price=min_price,
        max_price=max_price,
        min_beds=min_beds,
        max_beds=max_beds,
        property_type=property_type,
    )
    houses = await house_service.search_houses(filters, skip=skip, take=take)
    return HouseListResponse(houses=[HouseResponse.model_validate(house) for house in houses])


@router.get(
    "/{house_id}",
    response_model=HouseDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Listing detail",
    responses=get_error_responses(404)
)
async def get_house(
    house_id: str = Path(..., description="Listing id"),
    house_service: HouseService = Depends(get_house_service)
) -> HouseDetailResponse:
    """
    Get a listing by id, including inactive ones.

    Raises:
        HouseNotFoundError: If the listing does not exist
    """
    house = await house_service.get_house(house_id)
    return HouseDetailResponse(house=HouseResponse.model_validate(house))
