"""
Authentication service for signup, login and bearer token resolution.
"""

from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from timbr.repositories.user import UserRepository
from timbr.models.user import User
from timbr.schemas.auth import SignupRequest
from timbr.utils.auth import create_access_token, verify_token
from timbr.utils.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthorizedError,
    ValidationError,
)
from jose import JWTError
import uuid
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service.
    Signup creates the user and its role profile atomically; tokens carry only the user id.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def signup(self, signup_data: SignupRequest) -> Tuple[User, str]:
        """
        Register a user with the profile for its role.

        Args:
            signup_data: Validated signup request

        Returns:
            Tuple of (created user, access token)

        Raises:
            DuplicateUserError: If the email is already registered
            ValidationError: If the email or password is rejected
        """
        email = signup_data.email
        if await self.user_repo.get_by_email(email):
            logger.info(f"Signup rejected, email already registered: {email}")
            raise DuplicateUserError()

        try:
            user = await self.user_repo.create_user(
                signup_data.model_dump(include={"email", "password", "display_name", "role", "phone"})
            )
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            raise DuplicateUserError()
        except ValueError as e:
            raise ValidationError(str(e))

        logger.info(f"User signed up: {user.email} as {user.role.value}")
        return user, create_access_token(user.id)

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate a user and issue a token.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password does not match
        """
        user = await self.user_repo.authenticate_user(email, password)
        if not user:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        return user, create_access_token(user.id)

    async def get_current_user(self, token: str) -> User:
        """
        Resolve a bearer token to its user.

        Args:
            token: JWT access token

        Returns:
            User with its profile loaded

        Raises:
            InvalidTokenError: If the token cannot be verified (403)
            UnauthorizedError: If the token is valid but the user is gone (401)
        """
        try:
            token_payload = verify_token(token)
            user_id = uuid.UUID(token_payload.user_id)
        except (JWTError, ValueError) as e:
            logger.info(f"Rejected bearer token: {e}")
            raise InvalidTokenError()

        user = await self.get_user_by_id(user_id)
        if not user:
            logger.info(f"Token subject {user_id} no longer exists")
            raise UnauthorizedError("User not found")

        return user

    async def get_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Get a user with its profile, or None."""
        return await self.user_repo.get_with_profile(user_id)
