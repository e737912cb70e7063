"""
Database models for the Timbr API.
Includes users, role profiles, listings, images, swipes and buyer preferences.
"""

from timbr.models.user import User, UserRole
from timbr.models.profile import AgentProfile, SellerProfile, BuyerProfile, PROFILE_MODELS
from timbr.models.house import House, HouseImage, PropertyType
from timbr.models.swipe import Swipe, SwipeDirection
from timbr.models.preference import BuyerPreference, PREFERENCE_FIELDS

__all__ = [
    "User",
    "UserRole",
    "AgentProfile",
    "SellerProfile",
    "BuyerProfile",
    "PROFILE_MODELS",
    "House",
    "HouseImage",
    "PropertyType",
    "Swipe",
    "SwipeDirection",
    "BuyerPreference",
    "PREFERENCE_FIELDS",
]
