"""
Demo data seeding.
Creates agents, sellers and buyers (all with password `password123`),
listings with photo galleries and random buyer swipes.

    timbr-seed --agents 20 --sellers 40 --buyers 200 --houses 500 --reset
"""

from typing import Any, Dict, List, Optional, Set, Tuple
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from faker import Faker
from timbr.config import settings
from timbr.database import AsyncSessionLocal, create_tables, close_db_connection
from timbr.models import (
    User,
    UserRole,
    AgentProfile,
    SellerProfile,
    BuyerProfile,
    BuyerPreference,
    House,
    HouseImage,
    PropertyType,
    Swipe,
    SwipeDirection,
)
from timbr.models.user import pwd_context
import argparse
import asyncio
import logging
import math
import sys
import uuid

logger = logging.getLogger(__name__)

SEED_PASSWORD = "password123"
BROKERAGES = ["Compass", "Redfin", "Keller Williams", "Coldwell Banker", "Sotheby's"]
ROOM_TYPES = [
    "living-room", "kitchen", "bedroom", "bathroom", "dining-room",
    "home-office", "family-room", "master-bedroom", "guest-room",
]
MIN_IMAGES = 5
MAX_IMAGES = 10
MAX_SWIPES_PER_HOUSE = 50


def _photo_url(fake: Faker, tags: str) -> str:
    return f"https://loremflickr.com/1280/960/{tags}?random={fake.random_int(0, 10**9)}"


def generate_images(fake: Faker, house: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Photo gallery that follows the listing's features.
    Exterior first, then kitchen and living room, up to three bedrooms and two
    bathrooms, then optional rooms; always between 5 and 10 photos.
    """
    shots: List[Tuple[str, str]] = [
        ("house,exterior,home", "Front exterior view"),
        ("kitchen,modern,interior", "Modern kitchen with updated appliances"),
        ("living-room,interior,cozy", "Spacious living room"),
    ]

    for i in range(min(house["bedrooms"], 3)):
        if i == 0:
            shots.append(("master-bedroom,interior,comfortable", "Master bedroom suite"))
        else:
            shots.append(("bedroom,interior,comfortable", f"Bedroom {i + 1}"))

    bathroom_captions = ["Master bathroom", "Guest bathroom"]
    for caption in bathroom_captions[:min(math.ceil(house["bathrooms"]), 2)]:
        shots.append(("bathroom,interior,modern", caption))

    if house["has_garage"]:
        shots.append(("garage,car,driveway", "Attached garage"))
    if house["has_pool"]:
        shots.append(("pool,swimming,backyard", "Private swimming pool"))
    if house.get("lot_sqft") and house["lot_sqft"] > 5000:
        shots.append(("backyard,garden,landscape", "Spacious backyard"))
    if house["sqft"] > 2000:
        shots.append(("dining-room,interior,elegant", "Formal dining room"))
    if house.get("year_built") and house["year_built"] > 2000:
        shots.append(("home-office,workspace,modern", "Home office space"))

    while len(shots) < MIN_IMAGES:
        room = fake.random_element(ROOM_TYPES)
        shots.append((f"{room},interior,home", f"Additional {room.replace('-', ' ', 1)} view"))

    return [
        {"url": _photo_url(fake, tags), "caption": caption, "display_order": order}
        for order, (tags, caption) in enumerate(shots[:MAX_IMAGES])
    ]


def generate_house(fake: Faker) -> Dict[str, Any]:
    """Random listing column values."""
    property_type = fake.random_element(list(PropertyType))
    bedrooms = fake.random_int(1, 6)
    city = fake.city()

    return {
        "title": f"{bedrooms}BR {property_type.value} in {city}",
        "description": "\n\n".join(fake.paragraphs(nb=fake.random_int(1, 2))),
        "price": fake.random_int(150_000, 3_000_000),
        "bedrooms": bedrooms,
        "bathrooms": float(fake.random_int(1, 5)),
        "sqft": fake.random_int(600, 6000),
        "lot_sqft": fake.random_int(1000, 30000) if fake.boolean(chance_of_getting_true=70) else None,
        "year_built": fake.random_int(1900, 2024) if fake.boolean(chance_of_getting_true=90) else None,
        "property_type": property_type,
        "address_line1": fake.street_address(),
        "city": city,
        "state": fake.state_abbr(),
        "postal_code": fake.zipcode(),
        "country": "US",
        "latitude": float(fake.latitude()),
        "longitude": float(fake.longitude()),
        "hoa_monthly": fake.random_int(100, 1200) if fake.boolean(chance_of_getting_true=40) else None,
        "has_garage": fake.pybool(),
        "has_pool": fake.pybool(),
        "is_active": True,
    }


def generate_preferences(fake: Faker) -> Dict[str, Any]:
    return {
        "min_price": 250_000,
        "max_price": 1_500_000,
        "min_beds": 2,
        "max_beds": 5,
        "min_baths": 1.0,
        "max_baths": 4.0,
        "property_types": [t.value for t in PropertyType],
        "neighborhoods": [fake.city(), fake.city()],
        "min_sqft": 900,
        "max_sqft": 4000,
        "min_lot_sqft": 1000,
        "max_lot_sqft": 20000,
        "has_garage": fake.pybool(),
        "has_pool": fake.pybool(),
        "year_built_min": 1950,
        "year_built_max": 2024,
        "hoa_max_monthly": 600,
        "allow_fixer_upper": fake.pybool(),
    }


class Seeder:
    """Writes demo data through one session."""

    def __init__(self, session: AsyncSession, fake: Optional[Faker] = None):
        self.session = session
        self.fake = fake or Faker("en_US")
        self._password_hash = pwd_context.hash(SEED_PASSWORD)

    async def reset(self) -> None:
        """Delete all rows, children first."""
        for model in (Swipe, HouseImage, House, BuyerPreference, BuyerProfile, SellerProfile, AgentProfile, User):
            await self.session.execute(delete(model))
        await self.session.commit()
        logger.info("Removed existing data")

    def _user(self, role: UserRole, index: int) -> User:
        return User(
            email=f"{role.value.lower()}{index}@example.com",
            password_hash=self._password_hash,
            display_name=self.fake.name(),
            role=role,
            phone=self.fake.phone_number(),
            avatar_url=f"https://i.pravatar.cc/300?u={role.value.lower()}{index}",
        )

    async def create_agents(self, count: int) -> List[AgentProfile]:
        agents = []
        for i in range(count):
            user = self._user(UserRole.AGENT, i)
            user.agent_profile = AgentProfile(
                license_no=self.fake.bothify("??########").upper(),
                bio=" ".join(self.fake.sentences(nb=self.fake.random_int(1, 3))),
                website=self.fake.url(),
                brokerage=self.fake.random_element(BROKERAGES),
                rating=round(self.fake.pyfloat(min_value=3.5, max_value=5.0), 1),
            )
            self.session.add(user)
            agents.append(user.agent_profile)
        await self.session.flush()
        logger.info(f"Created {count} agents")
        return agents

    async def create_sellers(self, count: int) -> List[SellerProfile]:
        sellers = []
        for i in range(count):
            user = self._user(UserRole.SELLER, i)
            user.seller_profile = SellerProfile()
            self.session.add(user)
            sellers.append(user.seller_profile)
        await self.session.flush()
        logger.info(f"Created {count} sellers")
        return sellers

    async def create_buyers(self, count: int) -> List[uuid.UUID]:
        """Returns the buyers' user ids."""
        users = []
        for i in range(count):
            user = self._user(UserRole.BUYER, i)
            user.buyer_profile = BuyerProfile(
                preferences=BuyerPreference(**generate_preferences(self.fake))
            )
            self.session.add(user)
            users.append(user)
        await self.session.flush()
        logger.info(f"Created {count} buyers")
        return [user.id for user in users]

    async def create_houses(
        self,
        count: int,
        agents: List[AgentProfile],
        sellers: List[SellerProfile],
        buyer_user_ids: List[uuid.UUID]
    ) -> Tuple[int, int]:
        """
        Create listings with galleries and random swipes.

        Returns:
            Tuple of (houses created, swipes created)
        """
        swiped: Set[Tuple[uuid.UUID, uuid.UUID]] = set()
        swipe_count = 0

        for _ in range(count):
            data = generate_house(self.fake)
            house = House(**data)
            if agents and self.fake.boolean(chance_of_getting_true=70):
                house.agent_id = self.fake.random_element(agents).id
            if sellers and self.fake.boolean(chance_of_getting_true=60):
                house.seller_id = self.fake.random_element(sellers).id
            house.images = [HouseImage(**image) for image in generate_images(self.fake, data)]
            self.session.add(house)
            await self.session.flush()

            if not buyer_user_ids:
                continue

            for _ in range(self.fake.random_int(0, MAX_SWIPES_PER_HOUSE)):
                user_id = self.fake.random_element(buyer_user_ids)
                if (user_id, house.id) in swiped:
                    continue
                swiped.add((user_id, house.id))
                self.session.add(Swipe(
                    user_id=user_id,
                    house_id=house.id,
                    direction=SwipeDirection.RIGHT if self.fake.pybool() else SwipeDirection.LEFT,
                    dwell_ms=self.fake.random_int(500, 15000),
                ))
                swipe_count += 1

        await self.session.flush()
        logger.info(f"Created {count} houses and {swipe_count} swipes")
        return count, swipe_count

    async def run(
        self,
        agents: int = 20,
        sellers: int = 40,
        buyers: int = 200,
        houses: int = 500,
        reset: bool = False
    ) -> Dict[str, int]:
        """Seed everything in one transaction."""
        if reset:
            await self.reset()

        try:
            agent_profiles = await self.create_agents(agents)
            seller_profiles = await self.create_sellers(sellers)
            buyer_user_ids = await self.create_buyers(buyers)
            _, swipes = await self.create_houses(houses, agent_profiles, seller_profiles, buyer_user_ids)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Seeding failed: {e}")
            raise

        return {"agents": agents, "sellers": sellers, "buyers": buyers, "houses": houses, "swipes": swipes}


async def seed(
    args: argparse.Namespace,
    session_factory: async_sessionmaker = AsyncSessionLocal
) -> Dict[str, int]:
    await create_tables()
    fake = Faker("en_US")
    if args.faker_seed is not None:
        Faker.seed(args.faker_seed)

    async with session_factory() as session:
        return await Seeder(session, fake).run(
            agents=args.agents,
            sellers=args.sellers,
            buyers=args.buyers,
            houses=args.houses,
            reset=args.reset,
        )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="timbr-seed", description="Seed the Timbr database with demo data")
    parser.add_argument("--agents", type=int, default=20)
    parser.add_argument("--sellers", type=int, default=40)
    parser.add_argument("--buyers", type=int, default=200)
    parser.add_argument("--houses", type=int, default=500)
    parser.add_argument("--reset", action="store_true", help="Delete existing data first")
    parser.add_argument("--faker-seed", type=int, default=None, help="Seed for reproducible data")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    args = parse_args(argv)

    async def _run():
        try:
            return await seed(args)
        finally:
            await close_db_connection()

    try:
        counts = asyncio.run(_run())
    except Exception as e:
        logger.error(f"Seed failed: {e}")
        return 1

    logger.info(f"Seed complete: {counts}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
