"""
Listing service for the swipe feed and listing detail.
"""

from typing import List, Union
from sqlalchemy.ext.asyncio import AsyncSession
from timbr.repositories.house import HouseRepository, HouseSearchFilters
from timbr.models.house import House
from timbr.config import settings
from timbr.utils.exceptions import HouseNotFoundError, ValidationError
import uuid
import logging

logger = logging.getLogger(__name__)


class HouseService:
    """Read-only access to listings."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.house_repo = HouseRepository(db_session)

    async def search_houses(
        self,
        filters: HouseSearchFilters,
        skip: int = 0,
        take: int = settings.default_page_size
    ) -> List[House]:
        """
        Get one page of active listings, newest first.

        Args:
            filters: Optional price, bedroom and type bounds
            skip: Listings to skip (>= 0)
            take: Page size (1 to the configured maximum)

        Returns:
            List of listings with images and owners

        Raises:
            ValidationError: If paging values are out of range
        """
        if skip < 0:
            raise ValidationError("Invalid input")
        if take < 1 or take > settings.max_page_size:
            raise ValidationError("Invalid input")

        houses = await self.house_repo.search_houses(filters, skip=skip, take=take)
        logger.debug(f"Feed page skip={skip} take={take} returned {len(houses)} houses")
        return houses

    async def get_house(self, house_id: Union[str, uuid.UUID]) -> House:
        """
        Get a listing by id regardless of its active flag.

        Raises:
            HouseNotFoundError: If the id is malformed or no listing has it
        """
        if not isinstance(house_id, uuid.UUID):
            try:
                house_id = uuid.UUID(str(house_id))
            except ValueError:
                raise HouseNotFoundError()

        house = await self.house_repo.get_house_with_details(house_id)
        if not house:
            raise HouseNotFoundError()
        return house
