"""
Pydantic schemas for public user data and role profiles.
Role profiles form a tagged union discriminated by `role`.
"""

from pydantic import Field
from typing import Optional, Union, Literal, Annotated
from uuid import UUID
from timbr.models.user import UserRole
from timbr.schemas.common import CamelModel


class UserPublic(CamelModel):
    """User identity without credentials."""

    id: UUID = Field(..., description="User's unique identifier")
    email: str = Field(..., description="User's email address", examples=["buyer0@example.com"])
    display_name: str = Field(..., description="Name shown to other users", examples=["Jane Doe"])
    role: UserRole = Field(..., description="User's role", examples=["BUYER"])
    phone: Optional[str] = None
    avatar_url: Optional[str] = None


class AuthUser(CamelModel):
    """Compact user returned with a token at signup and login."""

    id: UUID
    email: str
    display_name: str
    role: UserRole


class AgentProfileResponse(CamelModel):
    """Agent variant of the role profile."""

    role: Literal[UserRole.AGENT] = UserRole.AGENT
    id: UUID
    license_no: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    brokerage: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)


class SellerProfileResponse(CamelModel):
    """Seller variant of the role profile."""

    role: Literal[UserRole.SELLER] = UserRole.SELLER
    id: UUID


class BuyerProfileResponse(CamelModel):
    """Buyer variant of the role profile."""

    role: Literal[UserRole.BUYER] = UserRole.BUYER
    id: UUID


RoleProfile = Annotated[
    Union[AgentProfileResponse, SellerProfileResponse, BuyerProfileResponse],
    Field(discriminator="role"),
]


class CurrentUserResponse(CamelModel):
    """Authenticated user with the profile matching their role."""

    user: UserPublic
    profile: Optional[RoleProfile] = None


PROFILE_RESPONSES = {
    UserRole.AGENT: AgentProfileResponse,
    UserRole.SELLER: SellerProfileResponse,
    UserRole.BUYER: BuyerProfileResponse,
}
