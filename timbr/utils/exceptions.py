"""
Custom exception classes for the Timbr API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str = "Invalid input"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


class ValidationError(BadRequestError):
    """Malformed or missing request fields."""

    def __init__(
        self,
        detail: str = "Invalid input",
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(detail)
        self.error_code = "VALIDATION_ERROR"
        self.field_errors = field_errors or []


class ConstraintViolationError(BadRequestError):
    """
    A storage constraint rejected the write.
    Reported as a plain bad request; the cause is not revealed.
    """

    def __init__(self, detail: str = "Invalid input"):
        super().__init__(detail)
        self.error_code = "CONSTRAINT_VIOLATION"


class DuplicateUserError(ConstraintViolationError):
    """Signup with an email that is already registered."""

    def __init__(self, detail: str = "User already exists"):
        super().__init__(detail)


class DuplicateSwipeError(ConstraintViolationError):
    """The user already swiped on this listing."""

    def __init__(self, detail: str = "Invalid input or already swiped"):
        super().__init__(detail)


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, detail: str = "Not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class HouseNotFoundError(NotFoundError):
    def __init__(self, detail: str = "Not found"):
        super().__init__(detail)


class AgentNotFoundError(NotFoundError):
    def __init__(self, detail: str = "Agent not found"):
        super().__init__(detail)


class BuyerProfileNotFoundError(NotFoundError):
    def __init__(self, detail: str = "Buyer profile not found"):
        super().__init__(detail)


class PreferenceNotFoundError(NotFoundError):
    def __init__(self, detail: str = "Preferences not found"):
        super().__init__(detail)


class UnauthorizedError(APIException):
    """Authentication required exception."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class InvalidCredentialsError(UnauthorizedError):
    """Invalid login credentials exception."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)


class ForbiddenError(APIException):
    """Access forbidden exception."""

    def __init__(self, detail: str = "Access forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class InvalidTokenError(ForbiddenError):
    """Token signature or payload could not be verified."""

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)


class ServiceUnavailableError(APIException):
    """Service unavailable exception."""

    def __init__(self, detail: str = "Service temporarily unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code="SERVICE_UNAVAILABLE"
        )
