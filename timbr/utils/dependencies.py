"""
FastAPI dependency injection utilities for authentication and services.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from timbr.database import get_db
from timbr.models.user import User
from timbr.services.auth import AuthService
from timbr.services.house import HouseService
from timbr.services.swipe import SwipeService
from timbr.services.preference import PreferenceService
from timbr.services.agent import AgentService
from timbr.utils.exceptions import UnauthorizedError


# HTTP Bearer token security scheme; a missing or non-bearer header yields None
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_house_service(db: AsyncSession = Depends(get_db)) -> HouseService:
    return HouseService(db)


async def get_swipe_service(db: AsyncSession = Depends(get_db)) -> SwipeService:
    return SwipeService(db)


async def get_preference_service(db: AsyncSession = Depends(get_db)) -> PreferenceService:
    return PreferenceService(db)


async def get_agent_service(db: AsyncSession = Depends(get_db)) -> AgentService:
    return AgentService(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer credentials
        auth_service: Authentication service

    Returns:
        Current User object

    Raises:
        UnauthorizedError: If no bearer token is provided or its user is gone
        InvalidTokenError: If the token fails verification
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(credentials.credentials)
