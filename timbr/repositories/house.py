"""
House repository for the listing feed and listing detail lookups.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, desc
from sqlalchemy.orm import selectinload
from timbr.repositories.base import BaseRepository
from timbr.models.house import House, HouseImage, PropertyType
from timbr.models.profile import AgentProfile, SellerProfile
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class HouseSearchFilters:
    """Data class for feed filters. Every bound is optional and inclusive."""

    def __init__(
        self,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
        min_beds: Optional[int] = None,
        max_beds: Optional[int] = None,
        property_type: Optional[PropertyType] = None,
    ):
        self.min_price = min_price
        self.max_price = max_price
        self.min_beds = min_beds
        self.max_beds = max_beds
        self.property_type = property_type


def _with_details(query):
    """Attach images and both owners (with their users) to a house query."""
    return query.options(
        selectinload(House.images),
        selectinload(House.agent).selectinload(AgentProfile.user),
        selectinload(House.seller).selectinload(SellerProfile.user),
    )


class HouseRepository(BaseRepository[House]):
    """
    Repository for listings.
    The feed only returns active listings; lookups by id do not filter on status.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(House, db)

    async def create_house(
        self,
        house_data: Dict[str, Any],
        images: Optional[List[Dict[str, Any]]] = None
    ) -> House:
        """
        Create a listing with its images in one transaction.

        Args:
            house_data: Column values for the listing
            images: Optional list of dicts with url, caption and display_order

        Returns:
            Created listing with details loaded
        """
        try:
            house = House(**house_data)
            house.images = [HouseImage(**image) for image in images or []]
            self.db.add(house)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create house: {e}")
            raise

        logger.info(f"Created house: {house.title} (ID: {house.id})")
        return await self.get_house_with_details(house.id)

    async def get_house_with_details(self, house_id: uuid.UUID) -> Optional[House]:
        """
        Get a listing with images and owners, whether active or not.

        Returns:
            House with loaded relationships or None if not found
        """
        try:
            query = _with_details(select(House)).where(House.id == house_id).execution_options(
                populate_existing=True
            )
            result = await self.db.execute(query)
            house = result.scalar_one_or_none()

            if house:
                logger.debug(f"Retrieved house with details: {house_id}")

            return house
        except Exception as e:
            logger.error(f"Failed to get house with details {house_id}: {e}")
            raise

    async def search_houses(
        self,
        filters: HouseSearchFilters,
        skip: int = 0,
        take: int = 20
    ) -> List[House]:
        """
        Return one page of active listings, newest first.

        Args:
            filters: HouseSearchFilters instance with search criteria
            skip: Number of records to skip for pagination
            take: Maximum number of records to return

        Returns:
            List of listings with details loaded
        """
        try:
            conditions = self._build_filter_conditions(filters)
            query = (
                _with_details(select(House))
                .where(and_(*conditions))
                .order_by(desc(House.created_at), desc(House.id))
                .offset(skip)
                .limit(take)
            )

            result = await self.db.execute(query)
            houses = list(result.scalars().all())

            logger.debug(f"House search returned {len(houses)} results (skip={skip}, take={take})")
            return houses
        except Exception as e:
            logger.error(f"Failed to search houses: {e}")
            raise

    def _build_filter_conditions(self, filters: HouseSearchFilters) -> List:
        """
        Build SQLAlchemy filter conditions from search filters.

        Returns:
            List of SQLAlchemy conditions, always including the active flag
        """
        conditions = [House.is_active.is_(True)]

        if filters.min_price is not None:
            conditions.append(House.price >= filters.min_price)

        if filters.max_price is not None:
            conditions.append(House.price <= filters.max_price)

        if filters.min_beds is not None:
            conditions.append(House.bedrooms >= filters.min_beds)

        if filters.max_beds is not None:
            conditions.append(House.bedrooms <= filters.max_beds)

        if filters.property_type is not None:
            conditions.append(House.property_type == filters.property_type)

        return conditions

    async def set_active(self, house_id: uuid.UUID, is_active: bool) -> Optional[House]:
        """
        Show or hide a listing in the feed.

        Returns:
            Updated listing or None if not found
        """
        house = await self.get_by_id(house_id)
        if not house:
            logger.debug(f"House with id {house_id} not found for status update")
            return None

        try:
            house.is_active = is_active
            await self.db.commit()
            await self.db.refresh(house)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update status of house {house_id}: {e}")
            raise

        status = "activated" if is_active else "deactivated"
        logger.info(f"House {house_id} {status}")
        return house
