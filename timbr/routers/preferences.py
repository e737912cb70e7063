"""
Buyer preference endpoints.
"""

from fastapi import APIRouter, Depends, status

from timbr.models.user import User
from timbr.services.preference import PreferenceService
from timbr.schemas.preference import PreferenceUpdate, PreferenceResponse, PreferenceEnvelope
from timbr.schemas.error import get_error_responses
from timbr.utils.dependencies import get_current_user, get_preference_service


router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get(
    "",
    response_model=PreferenceEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Get my preferences",
    responses=get_error_responses(401, 403, 404)
)
async def get_preferences(
    current_user: User = Depends(get_current_user),
    preference_service: PreferenceService = Depends(get_preference_service)
) -> PreferenceEnvelope:
    """
    Get the caller's stored preferences.

    Raises:
        BuyerProfileNotFoundError: If the caller is not a buyer
    """
    preference = await preference_service.get_preferences(current_user)
    return PreferenceEnvelope(preferences=PreferenceResponse.model_validate(preference))


@router.put(
    "",
    response_model=PreferenceEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Update my preferences",
    description="Partial update: only the fields present in the body are written; null clears a field",
    responses=get_error_responses(400, 401, 403, 404)
)
async def update_preferences(
    preference_data: PreferenceUpdate,
    current_user: User = Depends(get_current_user),
    preference_service: PreferenceService = Depends(get_preference_service)
) -> PreferenceEnvelope:
    """
    Create or update the caller's preferences.

    Args:
        preference_data: Fields to write
        current_user: Current authenticated user
        preference_service: Preference service

    Returns:
        The stored preferences

    Raises:
        BuyerProfileNotFoundError: If the caller is not a buyer
    """
    preference = await preference_service.update_preferences(
        current_user, preference_data.to_columns()
    )
    return PreferenceEnvelope(preferences=PreferenceResponse.model_validate(preference))
