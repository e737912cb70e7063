"""
Test configuration and fixtures for the Timbr API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Settings are read at import time; keep hashing cheap and stay off PostgreSQL by default
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import uuid
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Dict, List, Optional
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

import timbr.models  # noqa: F401
from timbr.main import app
from timbr.database import Base, get_db
from timbr.models.user import User, UserRole
from timbr.models.house import House, PropertyType
from timbr.models.profile import AgentProfile, SellerProfile
from timbr.repositories.user import UserRepository
from timbr.repositories.house import HouseRepository
from timbr.repositories.swipe import SwipeRepository
from timbr.repositories.preference import PreferenceRepository
from timbr.services.auth import AuthService
from timbr.services.house import HouseService
from timbr.services.swipe import SwipeService
from timbr.services.preference import PreferenceService
from timbr.services.agent import AgentService
from timbr.utils.auth import create_access_token


# Test database configuration
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

TEST_PASSWORD = "testpassword123"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def test_engine():
    """Fresh schema for every test."""
    is_sqlite = TEST_DATABASE_URL.startswith("sqlite")
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool if is_sqlite else None,
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )
    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def house_repository(db_session: AsyncSession) -> HouseRepository:
    return HouseRepository(db_session)


@pytest.fixture
def swipe_repository(db_session: AsyncSession) -> SwipeRepository:
    return SwipeRepository(db_session)


@pytest.fixture
def preference_repository(db_session: AsyncSession) -> PreferenceRepository:
    return PreferenceRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(db_session)


@pytest.fixture
def house_service(db_session: AsyncSession) -> HouseService:
    return HouseService(db_session)


@pytest.fixture
def swipe_service(db_session: AsyncSession) -> SwipeService:
    return SwipeService(db_session)


@pytest.fixture
def preference_service(db_session: AsyncSession) -> PreferenceService:
    return PreferenceService(db_session)


@pytest.fixture
def agent_service(db_session: AsyncSession) -> AgentService:
    return AgentService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        display_name: str = "Test User",
        role: UserRole = UserRole.BUYER,
        phone: Optional[str] = None
    ) -> dict:
        return {
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "display_name": display_name,
            "role": role,
            "phone": phone,
        }

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        role: UserRole = UserRole.BUYER,
        profile_data: Optional[dict] = None,
        **overrides
    ) -> User:
        """Create a test user with its role profile."""
        user_data = UserFactory.create_user_data(role=role, **overrides)
        return await user_repo.create_user(user_data, profile_data=profile_data)


class HouseFactory:
    """Factory for creating test listings."""

    @staticmethod
    def create_house_data(
        title: str = "3BR HOUSE in Springfield",
        price: int = 500_000,
        bedrooms: int = 3,
        bathrooms: float = 2.0,
        property_type: PropertyType = PropertyType.HOUSE,
        is_active: bool = True,
        agent_id: Optional[uuid.UUID] = None,
        seller_id: Optional[uuid.UUID] = None,
        created_at: Optional[datetime] = None,
        **extra
    ) -> dict:
        data = {
            "title": title,
            "description": "Bright and quiet",
            "price": price,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "sqft": 1800,
            "property_type": property_type,
            "address_line1": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "postal_code": "62701",
            "has_garage": True,
            "has_pool": False,
            "is_active": is_active,
            "agent_id": agent_id,
            "seller_id": seller_id,
        }
        if created_at is not None:
            data["created_at"] = created_at
        data.update(extra)
        return data

    @staticmethod
    def create_image_data(count: int = 2) -> List[dict]:
        # Deliberately stored out of order
        return [
            {"url": f"https://img.example.com/{i}.jpg", "caption": f"Photo {i}", "display_order": i}
            for i in reversed(range(count))
        ]

    @staticmethod
    async def create_house(
        house_repo: HouseRepository,
        images: Optional[List[dict]] = None,
        **overrides
    ) -> House:
        return await house_repo.create_house(HouseFactory.create_house_data(**overrides), images=images)

    @staticmethod
    async def create_houses(house_repo: HouseRepository, count: int, **overrides) -> List[House]:
        """Create listings one minute apart; the last one is the newest."""
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        houses = []
        for i in range(count):
            houses.append(await HouseFactory.create_house(
                house_repo,
                title=f"House {i}",
                created_at=start + timedelta(minutes=i),
                **overrides
            ))
        return houses


def auth_headers(user_id: uuid.UUID) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


# Common user fixtures
@pytest.fixture
async def test_buyer(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository, role=UserRole.BUYER, email="buyer@example.com", display_name="Bea Buyer"
    )


@pytest.fixture
async def test_agent(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        role=UserRole.AGENT,
        email="agent@example.com",
        display_name="Al Agent",
        profile_data={"license_no": "LIC1234567", "brokerage": "Compass", "rating": 4.5},
    )


@pytest.fixture
async def test_seller(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository, role=UserRole.SELLER, email="seller@example.com", display_name="Sam Seller"
    )


@pytest.fixture
def agent_profile(test_agent: User) -> AgentProfile:
    return test_agent.agent_profile


@pytest.fixture
def seller_profile(test_seller: User) -> SellerProfile:
    return test_seller.seller_profile


@pytest.fixture
async def test_house(house_repository: HouseRepository, agent_profile: AgentProfile, seller_profile: SellerProfile) -> House:
    return await HouseFactory.create_house(
        house_repository,
        images=HouseFactory.create_image_data(3),
        agent_id=agent_profile.id,
        seller_id=seller_profile.id,
    )


@pytest.fixture
def buyer_headers(test_buyer: User) -> Dict[str, str]:
    return auth_headers(test_buyer.id)
