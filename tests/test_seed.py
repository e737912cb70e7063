"""
Tests for demo data seeding.
"""

import argparse
import pytest
from faker import Faker
from sqlalchemy import select, func

from timbr.models import User, UserRole, House, HouseImage, Swipe, BuyerPreference
from timbr.repositories.user import UserRepository
from timbr.seed import (
    Seeder,
    SEED_PASSWORD,
    MIN_IMAGES,
    MAX_IMAGES,
    generate_house,
    generate_images,
    parse_args,
    seed,
)


@pytest.fixture
def fake() -> Faker:
    faker = Faker("en_US")
    faker.seed_instance(1234)
    return faker


def _house(**overrides) -> dict:
    data = {
        "bedrooms": 3,
        "bathrooms": 2.0,
        "sqft": 1500,
        "lot_sqft": None,
        "year_built": None,
        "has_garage": False,
        "has_pool": False,
    }
    data.update(overrides)
    return data


class TestGenerateImages:
    def test_exterior_first_and_ordered(self, fake):
        images = generate_images(fake, _house())

        assert images[0]["caption"] == "Front exterior view"
        assert [image["display_order"] for image in images] == list(range(len(images)))
        assert all(image["url"].startswith("https://") for image in images)

    def test_follows_features(self, fake):
        images = generate_images(fake, _house(bedrooms=1, has_garage=True, has_pool=True, sqft=2500))
        captions = [image["caption"] for image in images]

        assert "Attached garage" in captions
        assert "Private swimming pool" in captions
        assert "Formal dining room" in captions
        assert captions.count("Master bathroom") == 1

    def test_small_listing_padded_to_minimum(self, fake):
        images = generate_images(fake, _house(bedrooms=0, bathrooms=0.5))

        assert len(images) == MIN_IMAGES
        assert "Master bathroom" in [image["caption"] for image in images]

    def test_large_listing_capped(self, fake):
        images = generate_images(fake, _house(
            bedrooms=6, bathrooms=4.0, sqft=5000, lot_sqft=9000, year_built=2015,
            has_garage=True, has_pool=True,
        ))

        assert len(images) == MAX_IMAGES

    def test_random_listings_stay_in_range(self, fake):
        for _ in range(25):
            count = len(generate_images(fake, generate_house(fake)))
            assert MIN_IMAGES <= count <= MAX_IMAGES


class TestSeeder:
    async def test_run(self, session_factory, fake):
        async with session_factory() as session:
            counts = await Seeder(session, fake).run(agents=2, sellers=2, buyers=4, houses=6)

            houses = (await session.execute(select(func.count(House.id)))).scalar()
            images = (await session.execute(select(func.count(HouseImage.id)))).scalar()
            swipes = (await session.execute(select(Swipe.user_id, Swipe.house_id))).all()
            prefs = (await session.execute(select(func.count(BuyerPreference.id)))).scalar()

        assert counts["houses"] == 6
        assert houses == 6
        assert MIN_IMAGES * 6 <= images <= MAX_IMAGES * 6
        assert prefs == 4
        assert counts["swipes"] == len(swipes)
        assert len(set(swipes)) == len(swipes)

    async def test_seeded_users_can_log_in(self, session_factory, fake):
        async with session_factory() as session:
            await Seeder(session, fake).run(agents=1, sellers=1, buyers=1, houses=1)

            user = await UserRepository(session).authenticate_user("buyer0@example.com", SEED_PASSWORD)

        assert user is not None
        assert user.role == UserRole.BUYER

    async def test_reset_replaces_data(self, session_factory, fake):
        async with session_factory() as session:
            seeder = Seeder(session, fake)
            await seeder.run(agents=1, sellers=1, buyers=2, houses=2)
            await seeder.run(agents=1, sellers=1, buyers=2, houses=3, reset=True)

            users = (await session.execute(select(func.count(User.id)))).scalar()
            houses = (await session.execute(select(func.count(House.id)))).scalar()

        assert users == 4
        assert houses == 3

    async def test_seed_entrypoint(self, session_factory):
        args = argparse.Namespace(agents=1, sellers=0, buyers=1, houses=2, reset=False, faker_seed=7)

        counts = await seed(args, session_factory=session_factory)

        assert counts["houses"] == 2
        assert counts["sellers"] == 0


def test_parse_args():
    args = parse_args(["--houses", "10", "--reset", "--faker-seed", "3"])

    assert args.houses == 10
    assert args.reset is True
    assert args.faker_seed == 3
    assert args.agents == 20
