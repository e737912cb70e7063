"""
Integration tests for all API endpoints.
Tests complete request/response cycles against an in-memory database.
"""

import pytest
import uuid
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import select, func

from timbr.models import Swipe, BuyerProfile, BuyerPreference, UserRole
from timbr.utils.auth import create_access_token
from tests.conftest import HouseFactory, UserFactory, TEST_PASSWORD, auth_headers


class TestHealthEndpoints:
    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"ok": True, "service": "timbr-backend"}
        assert "X-Request-ID" in response.headers
        assert "X-Processing-Time" in response.headers

    async def test_health_db(self, async_client: AsyncClient):
        response = await async_client.get("/health/db")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["database"] == "connected"

    async def test_unknown_route_uses_error_body(self, async_client: AsyncClient):
        response = await async_client.get("/api/nope")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Not Found"}


class TestAuthenticationEndpoints:
    """Integration tests for authentication endpoints."""

    async def test_signup_buyer_creates_profile_and_preferences(self, async_client: AsyncClient, db_session):
        response = await async_client.post("/api/auth/signup", json={
            "email": "New.Buyer@Example.com",
            "password": "secret1",
            "displayName": "New Buyer",
            "role": "BUYER",
        })

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert set(data) == {"token", "user"}
        assert data["user"]["email"] == "new.buyer@example.com"
        assert data["user"]["displayName"] == "New Buyer"
        assert data["user"]["role"] == "BUYER"
        assert "passwordHash" not in data["user"]

        profiles = (await db_session.execute(select(func.count(BuyerProfile.id)))).scalar()
        preferences = (await db_session.execute(select(func.count(BuyerPreference.id)))).scalar()
        assert profiles == 1
        assert preferences == 1

        prefs = await async_client.get(
            "/api/preferences", headers={"Authorization": f"Bearer {data['token']}"}
        )
        assert prefs.status_code == status.HTTP_200_OK
        body = prefs.json()["preferences"]
        assert body["minPrice"] is None
        assert body["propertyTypes"] is None

    async def test_signup_duplicate_email(self, async_client: AsyncClient, test_buyer):
        response = await async_client.post("/api/auth/signup", json={
            "email": "buyer@example.com",
            "password": "secret1",
            "displayName": "Dup",
            "role": "SELLER",
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "User already exists"}

    @pytest.mark.parametrize("body", [
        {"email": "x@example.com", "password": "12345", "displayName": "X", "role": "BUYER"},
        {"email": "x@example.com", "password": "secret1", "displayName": "", "role": "BUYER"},
        {"email": "x@example.com", "password": "secret1", "displayName": "X", "role": "ADMIN"},
        {"email": "not-an-email", "password": "secret1", "displayName": "X", "role": "BUYER"},
        {"password": "secret1", "displayName": "X", "role": "BUYER"},
    ])
    async def test_signup_invalid_input(self, async_client: AsyncClient, body):
        response = await async_client.post("/api/auth/signup", json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid input"}

    async def test_login_success(self, async_client: AsyncClient, test_agent):
        response = await async_client.post("/api/auth/login", json={
            "email": "agent@example.com", "password": TEST_PASSWORD
        })

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token"]
        assert data["user"]["role"] == "AGENT"

    async def test_login_invalid_credentials(self, async_client: AsyncClient, test_agent):
        response = await async_client.post("/api/auth/login", json={
            "email": "agent@example.com", "password": "wrong-password"
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Invalid credentials"}

    async def test_me_returns_tagged_profile(self, async_client: AsyncClient, test_agent):
        response = await async_client.get("/api/auth/me", headers=auth_headers(test_agent.id))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["user"]["email"] == "agent@example.com"
        assert data["profile"]["role"] == "AGENT"
        assert data["profile"]["brokerage"] == "Compass"
        assert data["profile"]["licenseNo"] == "LIC1234567"

    async def test_me_for_buyer(self, async_client: AsyncClient, test_buyer, buyer_headers):
        response = await async_client.get("/api/auth/me", headers=buyer_headers)

        assert response.json()["profile"] == {"role": "BUYER", "id": str(test_buyer.buyer_profile.id)}


class TestAuthGate:
    """Bearer token handling on protected routes."""

    async def test_missing_header(self, async_client: AsyncClient):
        response = await async_client.get("/api/preferences")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "error" in response.json()

    async def test_non_bearer_header(self, async_client: AsyncClient):
        response = await async_client.get("/api/preferences", headers={"Authorization": "Basic abc"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_bad_token(self, async_client: AsyncClient):
        response = await async_client.get("/api/preferences", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert "error" in response.json()

    async def test_token_for_missing_user(self, async_client: AsyncClient):
        response = await async_client.get(
            "/api/preferences", headers={"Authorization": f"Bearer {create_access_token(uuid.uuid4())}"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestHouseEndpoints:
    async def test_list_shape(self, async_client: AsyncClient, test_house):
        response = await async_client.get("/api/houses")

        assert response.status_code == status.HTTP_200_OK
        houses = response.json()["houses"]
        assert len(houses) == 1
        house = houses[0]
        assert house["id"] == str(test_house.id)
        assert house["propertyType"] == "HOUSE"
        assert house["addressLine1"] == "1 Main St"
        assert [image["order"] for image in house["images"]] == [0, 1, 2]
        assert house["agent"]["user"]["displayName"] == "Al Agent"
        assert house["seller"]["user"]["displayName"] == "Sam Seller"
        assert "passwordHash" not in house["agent"]["user"]

    async def test_pagination(self, async_client: AsyncClient, house_repository):
        created = await HouseFactory.create_houses(house_repository, 12)
        expected = [str(h.id) for h in reversed(created)][5:10]

        response = await async_client.get("/api/houses", params={"take": 5, "skip": 5})

        assert [h["id"] for h in response.json()["houses"]] == expected

    async def test_default_page_size(self, async_client: AsyncClient, house_repository):
        await HouseFactory.create_houses(house_repository, 25)

        response = await async_client.get("/api/houses")

        assert len(response.json()["houses"]) == 20

    async def test_filters(self, async_client: AsyncClient, house_repository):
        match = await HouseFactory.create_house(house_repository, price=450_000, bedrooms=2, property_type="CONDO")
        await HouseFactory.create_house(house_repository, price=450_000, bedrooms=2, property_type="HOUSE")
        await HouseFactory.create_house(house_repository, price=1_450_000, bedrooms=2, property_type="CONDO")

        response = await async_client.get("/api/houses", params={
            "minPrice": 400_000, "maxPrice": 500_000, "minBeds": 2, "maxBeds": 2, "propertyType": "CONDO"
        })

        assert [h["id"] for h in response.json()["houses"]] == [str(match.id)]

    async def test_empty_result(self, async_client: AsyncClient):
        response = await async_client.get("/api/houses", params={"minPrice": 10})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"houses": []}

    @pytest.mark.parametrize("params", [
        {"take": 0},
        {"take": 101},
        {"skip": -1},
        {"take": "many"},
        {"minPrice": 5_000_000_000},
        {"skip": 3_000_000_000},
        {"propertyType": "CASTLE"},
    ])
    async def test_invalid_query(self, async_client: AsyncClient, params):
        response = await async_client.get("/api/houses", params=params)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid input"}

    async def test_deactivated_listing_hidden_from_feed_but_fetchable(
        self,
        async_client: AsyncClient,
        house_repository,
        test_house
    ):
        house_id = test_house.id
        await house_repository.set_active(house_id, False)

        feed = await async_client.get("/api/houses")
        detail = await async_client.get(f"/api/houses/{house_id}")

        assert feed.json()["houses"] == []
        assert detail.status_code == status.HTTP_200_OK
        assert detail.json()["house"]["isActive"] is False

    async def test_detail(self, async_client: AsyncClient, test_house):
        response = await async_client.get(f"/api/houses/{test_house.id}")

        assert response.status_code == status.HTTP_200_OK
        house = response.json()["house"]
        assert house["title"] == test_house.title
        assert len(house["images"]) == 3

    @pytest.mark.parametrize("house_id", [str(uuid.uuid4()), "not-a-uuid"])
    async def test_detail_not_found(self, async_client: AsyncClient, house_id):
        response = await async_client.get(f"/api/houses/{house_id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Not found"}


class TestSwipeEndpoints:
    async def test_swipe(self, async_client: AsyncClient, test_buyer, buyer_headers, test_house):
        response = await async_client.post("/api/swipes", headers=buyer_headers, json={
            "houseId": str(test_house.id), "direction": "RIGHT", "dwellMs": 2300
        })

        assert response.status_code == status.HTTP_200_OK
        swipe = response.json()["swipe"]
        assert swipe["houseId"] == str(test_house.id)
        assert swipe["userId"] == str(test_buyer.id)
        assert swipe["direction"] == "RIGHT"
        assert swipe["dwellMs"] == 2300
        assert swipe["createdAt"]

    async def test_second_swipe_rejected_and_first_kept(
        self,
        async_client: AsyncClient,
        db_session,
        buyer_headers,
        test_house
    ):
        house_id = test_house.id
        first = await async_client.post("/api/swipes", headers=buyer_headers, json={
            "houseId": str(house_id), "direction": "LEFT", "dwellMs": 100
        })
        second = await async_client.post("/api/swipes", headers=buyer_headers, json={
            "houseId": str(house_id), "direction": "RIGHT", "dwellMs": 9999
        })

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.json() == {"error": "Invalid input or already swiped"}

        swipes = (await db_session.execute(
            select(Swipe).where(Swipe.house_id == house_id).execution_options(populate_existing=True)
        )).scalars().all()
        assert len(swipes) == 1
        assert swipes[0].direction.value == "LEFT"
        assert swipes[0].dwell_ms == 100

    async def test_invalid_direction_persists_nothing(
        self,
        async_client: AsyncClient,
        db_session,
        buyer_headers,
        test_house
    ):
        response = await async_client.post("/api/swipes", headers=buyer_headers, json={
            "houseId": str(test_house.id), "direction": "UP"
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        count = (await db_session.execute(select(func.count(Swipe.id)))).scalar()
        assert count == 0

    async def test_swipe_unknown_house(self, async_client: AsyncClient, db_session, buyer_headers):
        response = await async_client.post("/api/swipes", headers=buyer_headers, json={
            "houseId": str(uuid.uuid4()), "direction": "LEFT"
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid input or already swiped"}
        count = (await db_session.execute(select(func.count(Swipe.id)))).scalar()
        assert count == 0

    async def test_oversized_dwell_rejected(self, async_client: AsyncClient, db_session, buyer_headers, test_house):
        response = await async_client.post("/api/swipes", headers=buyer_headers, json={
            "houseId": str(test_house.id), "direction": "LEFT", "dwellMs": 3_000_000_000
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid input"}
        count = (await db_session.execute(select(func.count(Swipe.id)))).scalar()
        assert count == 0

    async def test_swipe_requires_auth(self, async_client: AsyncClient, test_house):
        response = await async_client.post("/api/swipes", json={
            "houseId": str(test_house.id), "direction": "LEFT"
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_negative_dwell_rejected(self, async_client: AsyncClient, buyer_headers, test_house):
        response = await async_client.post("/api/swipes", headers=buyer_headers, json={
            "houseId": str(test_house.id), "direction": "LEFT", "dwellMs": -5
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestPreferenceEndpoints:
    async def test_partial_update_keeps_other_fields(self, async_client: AsyncClient, buyer_headers):
        await async_client.put("/api/preferences", headers=buyer_headers, json={"maxPrice": 800000})

        response = await async_client.put("/api/preferences", headers=buyer_headers, json={"minPrice": 300000})

        assert response.status_code == status.HTTP_200_OK
        prefs = response.json()["preferences"]
        assert prefs["minPrice"] == 300000
        assert prefs["maxPrice"] == 800000

    async def test_null_clears_field(self, async_client: AsyncClient, buyer_headers):
        await async_client.put("/api/preferences", headers=buyer_headers, json={"maxPrice": 800000, "hasPool": True})

        response = await async_client.put("/api/preferences", headers=buyer_headers, json={"maxPrice": None})

        prefs = response.json()["preferences"]
        assert prefs["maxPrice"] is None
        assert prefs["hasPool"] is True

    async def test_lists_and_unknown_fields(self, async_client: AsyncClient, buyer_headers):
        response = await async_client.put("/api/preferences", headers=buyer_headers, json={
            "propertyTypes": ["CONDO", "TOWNHOME", "CONDO"],
            "neighborhoods": ["Mission"],
            "favouriteColour": "green",
        })

        assert response.status_code == status.HTTP_200_OK
        prefs = response.json()["preferences"]
        assert prefs["propertyTypes"] == ["CONDO", "TOWNHOME"]
        assert prefs["neighborhoods"] == ["Mission"]
        assert "favouriteColour" not in prefs

        fetched = await async_client.get("/api/preferences", headers=buyer_headers)
        assert fetched.json()["preferences"]["propertyTypes"] == ["CONDO", "TOWNHOME"]

    @pytest.mark.parametrize("body", [
        {"minPrice": "cheap"},
        {"propertyTypes": ["CASTLE"]},
        {"hasPool": "sometimes"},
        {"minPrice": 5_000_000_000},
        {"yearBuiltMax": -1},
    ])
    async def test_wrong_types_rejected(self, async_client: AsyncClient, buyer_headers, body):
        response = await async_client.put("/api/preferences", headers=buyer_headers, json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_non_buyer(self, async_client: AsyncClient, test_agent):
        headers = auth_headers(test_agent.id)

        get_response = await async_client.get("/api/preferences", headers=headers)
        put_response = await async_client.put("/api/preferences", headers=headers, json={"minPrice": 1})

        assert get_response.status_code == status.HTTP_404_NOT_FOUND
        assert get_response.json() == {"error": "Buyer profile not found"}
        assert put_response.status_code == status.HTTP_404_NOT_FOUND


class TestAgentEndpoints:
    async def test_agent_with_listings(
        self,
        async_client: AsyncClient,
        house_repository,
        agent_profile,
        test_house
    ):
        hidden = await HouseFactory.create_house(house_repository, agent_id=agent_profile.id, is_active=False)

        response = await async_client.get(f"/api/agents/{agent_profile.id}")

        assert response.status_code == status.HTTP_200_OK
        agent = response.json()["agent"]
        assert agent["user"]["displayName"] == "Al Agent"
        assert agent["rating"] == 4.5
        assert {h["id"] for h in agent["listings"]} == {str(test_house.id), str(hidden.id)}
        listing = next(h for h in agent["listings"] if h["id"] == str(test_house.id))
        assert len(listing["images"]) == 3

    @pytest.mark.parametrize("agent_id", [str(uuid.uuid4()), "nope"])
    async def test_agent_not_found(self, async_client: AsyncClient, agent_id):
        response = await async_client.get(f"/api/agents/{agent_id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Agent not found"}

    async def test_seller_profile_id_is_not_an_agent(self, async_client: AsyncClient, user_repository):
        seller = await UserFactory.create_user(user_repository, role=UserRole.SELLER)

        response = await async_client.get(f"/api/agents/{seller.seller_profile.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
