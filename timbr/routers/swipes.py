"""
Swipe endpoint.
"""

from fastapi import APIRouter, Depends, status

from timbr.models.user import User
from timbr.services.swipe import SwipeService
from timbr.schemas.swipe import SwipeCreate, SwipeResponse, SwipeEnvelope
from timbr.schemas.error import get_error_responses
from timbr.utils.dependencies import get_current_user, get_swipe_service


router = APIRouter(prefix="/swipes", tags=["Swipes"])


@router.post(
    "",
    response_model=SwipeEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Record a swipe",
    description="Record a LEFT or RIGHT decision on a listing; one per user and listing",
    responses=get_error_responses(400, 401, 403, 404)
)
async def create_swipe(
    swipe_data: SwipeCreate,
    current_user: User = Depends(get_current_user),
    swipe_service: SwipeService = Depends(get_swipe_service)
) -> SwipeEnvelope:
    """
    Record the current user's decision on a listing.

    Args:
        swipe_data: House id, direction and optional dwell time
        current_user: Current authenticated user
        swipe_service: Swipe service

    Returns:
        The stored swipe

    Raises:
        HouseNotFoundError: If the listing does not exist
        DuplicateSwipeError: If the user already swiped on the listing
    """
    swipe = await swipe_service.record_swipe(swipe_data, current_user)
    return SwipeEnvelope(swipe=SwipeResponse.model_validate(swipe))
