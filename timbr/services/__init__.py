"""
Service layer for business logic implementation.
"""

from .auth import AuthService
from .house import HouseService
from .swipe import SwipeService
from .preference import PreferenceService
from .agent import AgentService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "HouseService",
    "SwipeService",
    "PreferenceService",
    "AgentService",
    "ErrorHandlerService",
]
