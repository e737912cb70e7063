"""
Error response schema for API documentation.
Every error body is a single `error` string.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    error: str = Field(..., description="Human-readable error message", examples=["Not found"])


def _example(description: str, message: str) -> Dict[str, Any]:
    return {
        "description": description,
        "model": ErrorResponse,
        "content": {"application/json": {"example": {"error": message}}},
    }


COMMON_ERROR_RESPONSES = {
    400: _example("Bad Request - Invalid input", "Invalid input"),
    401: _example("Unauthorized - Missing bearer token or unknown user", "Authentication required"),
    403: _example("Forbidden - Token could not be verified", "Invalid token"),
    404: _example("Not Found - Resource not found", "Not found"),
    500: _example("Internal Server Error - Unexpected error", "Internal server error"),
    503: _example("Service Unavailable - Database unreachable", "Database connection failed"),
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_auth_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get authentication and authorization error response schemas."""
    return get_error_responses(401, 403)
