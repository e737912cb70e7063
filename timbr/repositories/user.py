"""
User repository for signup, authentication and profile lookups.
A user and its role profile are always written in the same transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from timbr.repositories.base import BaseRepository
from timbr.models.user import User, UserRole
from timbr.models.profile import AgentProfile, BuyerProfile, PROFILE_MODELS
from timbr.models.preference import BuyerPreference
from timbr.models.house import House
from typing import Optional, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user management with authentication support.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(
        self,
        user_data: Dict[str, Any],
        profile_data: Optional[Dict[str, Any]] = None,
        preference_data: Optional[Dict[str, Any]] = None
    ) -> User:
        """
        Create a user together with the profile matching its role.

        Args:
            user_data: Must include email, password, display_name and role;
                      phone and avatar_url are optional
            profile_data: Extra columns for the role profile (agents only)
            preference_data: Initial preference values for a buyer; the
                      preference row is created empty when omitted

        Returns:
            Created user with its profile loaded

        Raises:
            ValueError: If email or password validation fails
            IntegrityError: If the email is already registered
        """
        data = dict(user_data)
        email = User.validate_email_format(data.pop("email"))
        password_hash = User.hash_password(data.pop("password"))
        role = UserRole(data.pop("role"))

        user = User(email=email, password_hash=password_hash, role=role, **data)

        profile = PROFILE_MODELS[role](**(profile_data or {}))
        if role == UserRole.AGENT:
            user.agent_profile = profile
        elif role == UserRole.SELLER:
            user.seller_profile = profile
        else:
            profile.preferences = BuyerPreference(**(preference_data or {}))
            user.buyer_profile = profile

        try:
            self.db.add(user)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create user {email}: {e}")
            raise

        logger.info(f"Created {role.value} user: {email} (ID: {user.id})")
        return await self.get_with_profile(user.id)

    async def get_with_profile(self, user_id: uuid.UUID) -> Optional[User]:
        """Get a user with all profile relationships loaded."""
        try:
            query = (
                select(User)
                .options(
                    selectinload(User.agent_profile),
                    selectinload(User.seller_profile),
                    selectinload(User.buyer_profile).selectinload(BuyerProfile.preferences),
                )
                .where(User.id == user_id)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get user with profile {user_id}: {e}")
            raise

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        try:
            normalized_email = email.lower().strip()

            result = await self.db.execute(select(User).where(User.email == normalized_email))
            user = result.scalar_one_or_none()

            if user:
                logger.debug(f"Retrieved user by email: {email}")
            else:
                logger.debug(f"User with email {email} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.

        Returns:
            User instance if authentication successful, None otherwise
        """
        user = await self.get_by_email(email)

        if not user:
            logger.debug(f"Authentication failed: user {email} not found")
            return None

        if not user.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None

        logger.info(f"User authenticated successfully: {email}")
        return user

    async def get_buyer_profile(self, user_id: uuid.UUID) -> Optional[BuyerProfile]:
        """Get the buyer profile owned by a user, if any."""
        try:
            result = await self.db.execute(
                select(BuyerProfile).where(BuyerProfile.user_id == user_id)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get buyer profile for user {user_id}: {e}")
            raise

    async def get_agent_with_listings(self, agent_id: uuid.UUID) -> Optional[AgentProfile]:
        """Get an agent profile by its own id, with its user and every listing and image."""
        try:
            query = (
                select(AgentProfile)
                .options(
                    selectinload(AgentProfile.user),
                    selectinload(AgentProfile.listings).selectinload(House.images),
                )
                .where(AgentProfile.id == agent_id)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get agent profile {agent_id}: {e}")
            raise
