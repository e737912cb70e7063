"""
Preference service. Preferences belong to the caller's buyer profile.
"""

from typing import Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from timbr.repositories.preference import PreferenceRepository
from timbr.repositories.user import UserRepository
from timbr.models.preference import BuyerPreference
from timbr.models.profile import BuyerProfile
from timbr.models.user import User
from timbr.utils.exceptions import BuyerProfileNotFoundError, PreferenceNotFoundError
import logging

logger = logging.getLogger(__name__)


class PreferenceService:
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.preference_repo = PreferenceRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def _get_buyer_profile(self, current_user: User) -> BuyerProfile:
        buyer = await self.user_repo.get_buyer_profile(current_user.id)
        if not buyer:
            raise BuyerProfileNotFoundError()
        return buyer

    async def get_preferences(self, current_user: User) -> BuyerPreference:
        """
        Get the caller's preferences.

        Raises:
            BuyerProfileNotFoundError: If the caller has no buyer profile
            PreferenceNotFoundError: If the preference row is missing
        """
        buyer = await self._get_buyer_profile(current_user)
        preference = await self.preference_repo.get_by_buyer_id(buyer.id)
        if not preference:
            raise PreferenceNotFoundError()
        return preference

    async def update_preferences(self, current_user: User, changes: Dict[str, Any]) -> BuyerPreference:
        """
        Write the given fields to the caller's preferences, creating the row if needed.

        Args:
            current_user: Authenticated caller
            changes: Only the fields sent by the client; None clears a field

        Raises:
            BuyerProfileNotFoundError: If the caller has no buyer profile
        """
        buyer = await self._get_buyer_profile(current_user)
        buyer_id = buyer.id
        preference = await self.preference_repo.upsert(buyer_id, changes)
        logger.info(f"Preferences saved for buyer {buyer_id} (user {current_user.id})")
        return preference
