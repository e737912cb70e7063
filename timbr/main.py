"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
import logging

from timbr.config import settings
from timbr.database import test_database_connection, close_db_connection
from timbr.routers import (
    auth_router,
    houses_router,
    swipes_router,
    preferences_router,
    agents_router,
)
from timbr.utils.exceptions import APIException, ServiceUnavailableError
from timbr.services.error_handler import ErrorHandlerService
from timbr.middleware.request_logging import RequestLoggingMiddleware
from timbr.schemas.error import get_error_responses

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    if not settings.is_testing:
        db_connected = await test_database_connection()
        if not db_connected:
            # Keep serving; /health/db reports the failure
            logger.error("Failed to connect to database on startup")

    yield

    # Shutdown
    logger.info("Shutting down application")
    await close_db_connection()


# Create FastAPI application instance
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Backend for a swipe-to-match real-estate app.

    ## Features

    * **Listing feed**: Active listings, newest first, with price, bedroom and type filters
    * **Swipes**: One LEFT/RIGHT decision per buyer and listing, with dwell time
    * **Preferences**: Partial upsert of a buyer's search criteria
    * **Agents**: Public agent profiles with their listings

    ## Authentication

    Sign up or log in under `/api/auth`, then send the token as `Authorization: Bearer <token>`.
    """,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Signup, login and the current user"},
        {"name": "Houses", "description": "Listing feed and listing detail"},
        {"name": "Swipes", "description": "Swipe recording"},
        {"name": "Preferences", "description": "Buyer search preferences"},
        {"name": "Agents", "description": "Public agent profiles"},
        {"name": "Health", "description": "Liveness and database checks"},
    ],
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Processing-Time"],
)

# Add request logging middleware
app.add_middleware(
    RequestLoggingMiddleware,
    enable_detailed_logging=settings.debug,
    slow_request_threshold=2.0,  # Log requests slower than 2 seconds
)

# Include API routers
app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(houses_router, prefix=API_PREFIX)
app.include_router(swipes_router, prefix=API_PREFIX)
app.include_router(preferences_router, prefix=API_PREFIX)
app.include_router(agents_router, prefix=API_PREFIX)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    """Handle Pydantic validation errors."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors."""
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle framework HTTP exceptions such as 404 for unknown routes."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Liveness check. Does not touch the database.
    """
    return {"ok": True, "service": settings.service_name}


@app.get("/health/db", tags=["Health"], responses=get_error_responses(503))
async def database_health_check():
    """
    Dedicated database health check endpoint.
    """
    db_healthy = await test_database_connection()

    if not db_healthy:
        raise ServiceUnavailableError("Database connection failed")

    return {
        "status": "healthy",
        "service": settings.service_name,
        "database": "connected",
    }


def run():
    """Run the API with uvicorn."""
    import uvicorn
    uvicorn.run(
        "timbr.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug and settings.is_development
    )


if __name__ == "__main__":
    run()
