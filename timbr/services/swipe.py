"""
Swipe service: records one decision per user and listing.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from timbr.repositories.swipe import SwipeRepository
from timbr.models.swipe import Swipe
from timbr.models.user import User
from timbr.schemas.swipe import SwipeCreate
from timbr.utils.exceptions import DuplicateSwipeError
import logging

logger = logging.getLogger(__name__)


class SwipeService:
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.swipe_repo = SwipeRepository(db_session)

    async def record_swipe(self, swipe_data: SwipeCreate, current_user: User) -> Swipe:
        """
        Record a swipe for the current user.

        A second swipe on the same listing is rejected and the first one is
        left as it was.

        Raises:
            DuplicateSwipeError: If the user already swiped on it or the
                listing does not exist
        """
        user_id = current_user.id
        house_id = swipe_data.house_id

        try:
            swipe = await self.swipe_repo.create_swipe(
                user_id=user_id,
                house_id=house_id,
                direction=swipe_data.direction,
                dwell_ms=swipe_data.dwell_ms,
            )
        except IntegrityError:
            raise DuplicateSwipeError()

        logger.info(f"User {user_id} swiped {swipe.direction.value} on house {house_id}")
        return swipe
