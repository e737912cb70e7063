"""
Utility modules for the Timbr API.
"""

from .auth import create_access_token, verify_token, TokenPayload

from .exceptions import (
    APIException,
    BadRequestError,
    ValidationError,
    ConstraintViolationError,
    DuplicateUserError,
    DuplicateSwipeError,
    NotFoundError,
    HouseNotFoundError,
    AgentNotFoundError,
    BuyerProfileNotFoundError,
    PreferenceNotFoundError,
    UnauthorizedError,
    InvalidCredentialsError,
    ForbiddenError,
    InvalidTokenError,
    ServiceUnavailableError,
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "create_access_token",
    "verify_token",
    "TokenPayload",

    # Exceptions
    "APIException",
    "BadRequestError",
    "ValidationError",
    "ConstraintViolationError",
    "DuplicateUserError",
    "DuplicateSwipeError",
    "NotFoundError",
    "HouseNotFoundError",
    "AgentNotFoundError",
    "BuyerProfileNotFoundError",
    "PreferenceNotFoundError",
    "UnauthorizedError",
    "InvalidCredentialsError",
    "ForbiddenError",
    "InvalidTokenError",
    "ServiceUnavailableError",
]
