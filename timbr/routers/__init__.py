"""
API route handlers for the Timbr API.
"""

from .auth import router as auth_router
from .houses import router as houses_router
from .swipes import router as swipes_router
from .preferences import router as preferences_router
from .agents import router as agents_router

__all__ = [
    "auth_router",
    "houses_router",
    "swipes_router",
    "preferences_router",
    "agents_router",
]
