"""
User model with authentication and role management.
Every user is a buyer, a seller or an agent and owns exactly one matching profile.
"""

from sqlalchemy import String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from timbr.database import Base
from timbr.config import settings
from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError
import enum
from typing import List, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from timbr.models.profile import AgentProfile, SellerProfile, BuyerProfile
    from timbr.models.swipe import Swipe

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

MIN_PASSWORD_LENGTH = 6


class UserRole(str, enum.Enum):
    """User role enumeration. A user's role never changes after signup."""
    BUYER = "BUYER"
    SELLER = "SELLER"
    AGENT = "AGENT"


class User(Base):
    """
    User model for authentication and authorization.
    The role-specific data lives in one of three profile tables, exposed through `profile`.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    display_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Name shown to other users"
    )

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="user_role"),
        nullable=False,
        index=True,
        comment="Buyer, seller or agent; fixed at signup"
    )

    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    avatar_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    # Role profiles - only the one matching `role` exists
    agent_profile: Mapped[Optional["AgentProfile"]] = relationship(
        "AgentProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    seller_profile: Mapped[Optional["SellerProfile"]] = relationship(
        "SellerProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    buyer_profile: Mapped[Optional["BuyerProfile"]] = relationship(
        "BuyerProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    swipes: Mapped[List["Swipe"]] = relationship(
        "Swipe",
        back_populates="user",
        passive_deletes=True,
        lazy="raise"
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

    @property
    def profile(self) -> Union["AgentProfile", "SellerProfile", "BuyerProfile", None]:
        """The role profile selected by the user's role."""
        if self.role == UserRole.AGENT:
            return self.agent_profile
        if self.role == UserRole.SELLER:
            return self.seller_profile
        return self.buyer_profile

    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.

        Args:
            email: Email address to validate

        Returns:
            Normalized email address

        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")

    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a password using bcrypt.

        Raises:
            ValueError: If the password is too short
        """
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        return pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return pwd_context.verify(password, self.password_hash)

    @property
    def is_buyer(self) -> bool:
        return self.role == UserRole.BUYER

    @property
    def is_agent(self) -> bool:
        return self.role == UserRole.AGENT
