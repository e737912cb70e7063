"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import SignupRequest, LoginRequest, AuthResponse

# User schemas
from .user import (
    UserPublic,
    AuthUser,
    AgentProfileResponse,
    SellerProfileResponse,
    BuyerProfileResponse,
    RoleProfile,
    CurrentUserResponse,
    PROFILE_RESPONSES,
)

# Listing schemas
from .house import (
    HouseImageResponse,
    AgentSummary,
    SellerSummary,
    HouseBase,
    HouseResponse,
    HouseListResponse,
    HouseDetailResponse,
)

# Swipe and preference schemas
from .swipe import SwipeCreate, SwipeResponse, SwipeEnvelope
from .preference import PreferenceUpdate, PreferenceResponse, PreferenceEnvelope
from .agent import AgentDetail, AgentEnvelope
from .error import ErrorResponse

__all__ = [
    # Authentication
    "SignupRequest",
    "LoginRequest",
    "AuthResponse",

    # User
    "UserPublic",
    "AuthUser",
    "AgentProfileResponse",
    "SellerProfileResponse",
    "BuyerProfileResponse",
    "RoleProfile",
    "CurrentUserResponse",
    "PROFILE_RESPONSES",

    # Listing
    "HouseImageResponse",
    "AgentSummary",
    "SellerSummary",
    "HouseBase",
    "HouseResponse",
    "HouseListResponse",
    "HouseDetailResponse",

    # Swipe, preference, agent
    "SwipeCreate",
    "SwipeResponse",
    "SwipeEnvelope",
    "PreferenceUpdate",
    "PreferenceResponse",
    "PreferenceEnvelope",
    "AgentDetail",
    "AgentEnvelope",
    "ErrorResponse",
]
