"""
Preference repository with partial upsert keyed by buyer profile.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from timbr.repositories.base import BaseRepository
from timbr.models.preference import BuyerPreference, PREFERENCE_FIELDS
from typing import Optional, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class PreferenceRepository(BaseRepository[BuyerPreference]):
    """Repository for buyer preferences."""

    def __init__(self, db: AsyncSession):
        super().__init__(BuyerPreference, db)

    async def get_by_buyer_id(self, buyer_id: uuid.UUID) -> Optional[BuyerPreference]:
        """Get the preference row of a buyer profile."""
        return await self.get_by_field("buyer_id", buyer_id)

    async def upsert(self, buyer_id: uuid.UUID, changes: Dict[str, Any]) -> BuyerPreference:
        """
        Create the buyer's preference row or update it in place.

        Only keys present in `changes` are written; a None value clears
        the column. Keys that are not preference columns are ignored.

        Args:
            buyer_id: BuyerProfile id owning the row
            changes: Column values to write

        Returns:
            The stored preference row
        """
        data = {k: v for k, v in changes.items() if k in PREFERENCE_FIELDS}

        try:
            preference = await self.get_by_buyer_id(buyer_id)
            if preference is None:
                preference = BuyerPreference(buyer_id=buyer_id, **data)
                self.db.add(preference)
                action = "Created"
            else:
                for field, value in data.items():
                    setattr(preference, field, value)
                action = "Updated"

            await self.db.commit()
            await self.db.refresh(preference)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to upsert preferences for buyer {buyer_id}: {e}")
            raise

        logger.info(f"{action} preferences for buyer {buyer_id}: {sorted(data)}")
        return preference
