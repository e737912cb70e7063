"""
Error handling service for consistent error response formatting and logging.
Every error leaves the API as `{"error": message}` with an X-Request-ID header.
"""

from typing import Dict, Any, Optional
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from timbr.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)

INVALID_INPUT = "Invalid input"
INTERNAL_ERROR = "Internal server error"


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    """

    @staticmethod
    def format_error_response(message: str) -> Dict[str, Any]:
        """Format an error body."""
        return {"error": message}

    @staticmethod
    def _respond(
        status_code: int,
        message: str,
        request_id: str,
        headers: Optional[Dict[str, str]] = None
    ) -> JSONResponse:
        response_headers = dict(headers or {})
        response_headers["X-Request-ID"] = request_id
        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(message),
            headers=response_headers,
        )

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle custom API exceptions.

        Args:
            exception: API exception instance
            request: Optional FastAPI request object

        Returns:
            JSON response with the exception's status and message
        """
        request_id = ErrorHandlerService._get_request_id(request)

        logger.warning(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return ErrorHandlerService._respond(
            exception.status_code, exception.detail, request_id, exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle request validation errors.
        Field details are logged but the client only sees a generic 400.
        """
        request_id = ErrorHandlerService._get_request_id(request)

        errors = exception.errors() if hasattr(exception, "errors") else []
        validation_details = [
            {
                "field": " -> ".join(str(loc) for loc in error.get("loc", ())),
                "message": error.get("msg"),
                "type": error.get("type"),
            }
            for error in errors
        ]

        logger.warning(
            f"Validation Error [{request_id}]: {len(validation_details)} field errors",
            extra={
                "error_count": len(validation_details),
                "request_id": request_id,
                "path": request.url.path if request else None,
                "validation_errors": validation_details
            }
        )

        return ErrorHandlerService._respond(400, INVALID_INPUT, request_id)

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle database errors.
        Constraint violations are the caller's fault (400); anything else is a 500.
        """
        request_id = ErrorHandlerService._get_request_id(request)

        if isinstance(exception, IntegrityError):
            error_code = "INTEGRITY_ERROR"
            message = INVALID_INPUT
            status_code = 400
            constraint_info = ErrorHandlerService._extract_constraint_info(exception)
            log_detail = constraint_info or str(exception.orig)
        else:
            error_code = "DATABASE_ERROR"
            message = INTERNAL_ERROR
            status_code = 500
            log_detail = str(exception)

        logger.error(
            f"Database Error [{request_id}]: {error_code} - {log_detail}",
            extra={
                "error_code": error_code,
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=status_code >= 500
        )

        return ErrorHandlerService._respond(status_code, message, request_id)

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle framework HTTP exceptions such as unknown routes or wrong methods.
        """
        request_id = ErrorHandlerService._get_request_id(request)

        logger.warning(
            f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}",
            extra={
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return ErrorHandlerService._respond(
            exception.status_code,
            str(exception.detail),
            request_id,
            getattr(exception, "headers", None),
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle unexpected errors without exposing internals.
        """
        request_id = ErrorHandlerService._get_request_id(request)

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {str(exception)}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__,
            },
            exc_info=True
        )

        return ErrorHandlerService._respond(500, INTERNAL_ERROR, request_id)

    @staticmethod
    def _get_request_id(request: Optional[Request]) -> str:
        """Reuse the id assigned by the request middleware, or make one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return ErrorHandlerService._generate_request_id()

    @staticmethod
    def _generate_request_id() -> str:
        """Generate a unique request ID for error tracking."""
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _extract_constraint_info(exception: IntegrityError) -> Optional[str]:
        """
        Extract constraint information from integrity error, for logs only.

        Returns:
            Constraint information string or None
        """
        error_msg = str(exception.orig).lower()

        if "unique" in error_msg:
            return "Duplicate value for unique field"
        elif "foreign key" in error_msg:
            return "Referenced record does not exist"
        elif "not null" in error_msg:
            return "Required field cannot be empty"
        elif "check constraint" in error_msg:
            return "Value does not meet validation requirements"

        return None
