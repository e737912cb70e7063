"""
Swipe repository.
Uniqueness per (user, house) is left to the database constraint; no read-before-write.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from timbr.repositories.base import BaseRepository
from timbr.models.swipe import Swipe, SwipeDirection
from typing import Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class SwipeRepository(BaseRepository[Swipe]):
    """Repository for the append-only swipe log."""

    def __init__(self, db: AsyncSession):
        super().__init__(Swipe, db)

    async def create_swipe(
        self,
        user_id: uuid.UUID,
        house_id: uuid.UUID,
        direction: SwipeDirection,
        dwell_ms: Optional[int] = None
    ) -> Swipe:
        """
        Insert a swipe.

        Raises:
            IntegrityError: If the user already swiped on the house or a
                reference is missing; the transaction is rolled back and
                the existing row is untouched
        """
        swipe = Swipe(
            user_id=user_id,
            house_id=house_id,
            direction=SwipeDirection(direction),
            dwell_ms=dwell_ms,
        )
        try:
            self.db.add(swipe)
            await self.db.commit()
            await self.db.refresh(swipe)
        except IntegrityError as e:
            await self.db.rollback()
            logger.info(f"Swipe rejected for user {user_id} on house {house_id}: {e.orig}")
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create swipe for user {user_id} on house {house_id}: {e}")
            raise

        logger.debug(f"Recorded {swipe.direction.value} swipe {swipe.id} by {user_id} on {house_id}")
        return swipe

    async def get_for_user_and_house(
        self,
        user_id: uuid.UUID,
        house_id: uuid.UUID
    ) -> Optional[Swipe]:
        """Get the swipe a user recorded on a house, if any."""
        try:
            result = await self.db.execute(
                select(Swipe)
                .where(Swipe.user_id == user_id, Swipe.house_id == house_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get swipe for user {user_id} on house {house_id}: {e}")
            raise
