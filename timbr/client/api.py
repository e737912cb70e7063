"""
Async HTTP client for the Timbr API.
"""

from typing import Any, Dict, List, Optional
from timbr.client.session import Session
import httpx
import logging

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response; `message` is the server's `error` string."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TimbrClient:
    """
    Thin wrapper over httpx.AsyncClient.
    Protected calls carry the session's bearer token; responses are returned as plain dicts.
    """

    def __init__(
        self,
        base_url: str,
        session: Session,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "TimbrClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        auth: bool = False,
        **kwargs: Any
    ) -> Dict[str, Any]:
        headers = self.session.auth_headers() if auth else {}
        response = await self._http.request(method, path, headers=headers, **kwargs)

        if response.is_success:
            return response.json()

        try:
            message = response.json().get("error") or response.reason_phrase
        except ValueError:
            message = response.text or response.reason_phrase

        logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
        raise ApiError(response.status_code, message)

    # Authentication

    async def signup(
        self,
        email: str,
        password: str,
        display_name: str,
        role: str = "BUYER",
        phone: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create an account and establish the session."""
        body = {"email": email, "password": password, "displayName": display_name, "role": role}
        if phone:
            body["phone"] = phone
        data = await self._request("POST", "/api/auth/signup", json=body)
        self.session.establish(data["token"], data["user"])
        return data["user"]

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Log in and establish the session."""
        data = await self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.session.establish(data["token"], data["user"])
        return data["user"]

    def logout(self) -> None:
        self.session.clear()

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/auth/me", auth=True)

    # Listings

    async def list_houses(
        self,
        take: int = 20,
        skip: int = 0,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
        min_beds: Optional[int] = None,
        max_beds: Optional[int] = None,
        property_type: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        params = {
            "take": take,
            "skip": skip,
            "minPrice": min_price,
            "maxPrice": max_price,
            "minBeds": min_beds,
            "maxBeds": max_beds,
            "propertyType": property_type,
        }
        params = {k: v for k, v in params.items() if v is not None}
        data = await self._request("GET", "/api/houses", params=params)
        return data["houses"]

    async def get_house(self, house_id: str) -> Dict[str, Any]:
        data = await self._request("GET", f"/api/houses/{house_id}")
        return data["house"]

    # Swipes and preferences

    async def record_swipe(
        self,
        house_id: str,
        direction: str,
        dwell_ms: Optional[int] = None
    ) -> Dict[str, Any]:
        body = {"houseId": house_id, "direction": direction}
        if dwell_ms is not None:
            body["dwellMs"] = dwell_ms
        data = await self._request("POST", "/api/swipes", auth=True, json=body)
        return data["swipe"]

    async def get_preferences(self) -> Dict[str, Any]:
        data = await self._request("GET", "/api/preferences", auth=True)
        return data["preferences"]

    async def update_preferences(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Send only the camelCase fields to change; None clears a field."""
        data = await self._request("PUT", "/api/preferences", auth=True, json=changes)
        return data["preferences"]

    # Agents and health

    async def get_agent(self, agent_id: str) -> Dict[str, Any]:
        data = await self._request("GET", f"/api/agents/{agent_id}")
        return data["agent"]

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")
