"""
Repository layer for data access operations.
"""

from timbr.repositories.base import BaseRepository
from timbr.repositories.house import HouseRepository, HouseSearchFilters
from timbr.repositories.preference import PreferenceRepository
from timbr.repositories.swipe import SwipeRepository
from timbr.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "HouseRepository",
    "HouseSearchFilters",
    "PreferenceRepository",
    "SwipeRepository",
    "UserRepository",
]
