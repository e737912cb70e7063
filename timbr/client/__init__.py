"""
Swipe client for the Timbr API.
"""

from .session import Session
from .api import TimbrClient, ApiError
from .tasks import BestEffortDispatcher
from .controller import SwipeController, LEFT, RIGHT

__all__ = [
    "Session",
    "TimbrClient",
    "ApiError",
    "BestEffortDispatcher",
    "SwipeController",
    "LEFT",
    "RIGHT",
]
