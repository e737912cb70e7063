"""
Authentication utilities for JWT token management.
Tokens carry the user id as subject and are signed with the configured secret.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from timbr.config import settings
import uuid


class TokenPayload:
    """JWT token payload structure."""

    def __init__(self, user_id: str, issued_at: Optional[datetime], exp: Optional[datetime]):
        self.user_id = user_id
        self.issued_at = issued_at
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from dictionary."""
        iat = data.get("iat")
        exp = data.get("exp")
        return cls(
            user_id=data["sub"],
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc) if iat else None,
            exp=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None
        )


def create_access_token(
    user_id: uuid.UUID,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed access token for a user.

    Args:
        user_id: User's UUID
        expires_delta: Optional lifetime; falls back to the configured one,
            and tokens carry no expiry when neither is set

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    to_encode: Dict[str, Any] = {
        "sub": str(user_id),
        "iat": now,
    }

    if expires_delta is None and settings.access_token_expire_minutes:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    if expires_delta is not None:
        to_encode["exp"] = now + expires_delta

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def verify_token(token: str) -> TokenPayload:
    """
    Verify and decode a JWT token.

    Raises:
        JWTError: If the signature, expiry or payload is invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        raise
    except Exception as e:
        raise JWTError(f"Token validation error: {str(e)}")

    user_id = payload.get("sub")
    if not user_id:
        raise JWTError("Invalid token payload")

    return TokenPayload.from_dict(payload)
