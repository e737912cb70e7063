"""
Request logging middleware.
Assigns a short request id, times the request and logs the outcome.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request timing and logging.
    Sets X-Request-ID and X-Processing-Time on every response.
    """

    def __init__(
        self,
        app: ASGIApp,
        enable_detailed_logging: bool = False,
        slow_request_threshold: float = 1.0,  # seconds
    ):
        super().__init__(app)
        self.enable_detailed_logging = enable_detailed_logging
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request through the logging middleware.

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response object with request id and timing headers
        """
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start_time = time.time()

        if self.enable_detailed_logging:
            logger.debug(
                f"Request [{request_id}]: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "query_params": str(request.query_params),
                }
            )

        try:
            response = await call_next(request)
        except Exception as exc:
            processing_time = time.time() - start_time
            logger.error(
                f"Request error [{request_id}]: {type(exc).__name__} - {str(exc)} "
                f"(processing_time: {processing_time:.3f}s)",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                    "processing_time": processing_time,
                },
                exc_info=True
            )
            raise

        processing_time = time.time() - start_time
        self._log_response(request, response, request_id, processing_time)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"
        return response

    def _log_response(
        self,
        request: Request,
        response: Response,
        request_id: str,
        processing_time: float
    ) -> None:
        message = (
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"in {processing_time:.3f}s [{request_id}]"
        )
        extra = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "processing_time": processing_time,
        }

        if processing_time > self.slow_request_threshold:
            logger.warning(f"Slow request: {message}", extra=extra)
        elif response.status_code >= 500:
            logger.error(message, extra=extra)
        else:
            logger.info(message, extra=extra)
