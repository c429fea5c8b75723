"""
Authentication utilities for JWT token management.
Provides token generation and verification of the embedded identity claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from property_desk.config import settings
from property_desk.models.user import UserRole
from property_desk.utils.exceptions import InvalidTokenError, TokenExpiredError
import uuid


class TokenPayload:
    """Identity carried by a verified bearer token."""

    def __init__(self, user_id: uuid.UUID, email: str, role: UserRole, exp: Optional[datetime] = None):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """
        Create TokenPayload from decoded claims.

        Raises:
            ValueError: If a claim is missing or malformed
        """
        user_id = data.get("id")
        email = data.get("email")
        role = data.get("role")
        if not user_id or not email or not role:
            raise ValueError("Token payload is missing identity claims")

        exp = data.get("exp")
        return cls(
            user_id=uuid.UUID(str(user_id)),
            email=email,
            role=UserRole(role),
            exp=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_dict(self) -> dict:
        return {"id": str(self.user_id), "email": self.email, "role": self.role.value}

    def __repr__(self) -> str:
        return f"<TokenPayload(user_id={self.user_id}, role={self.role.value})>"


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    role: UserRole,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token with user claims.

    Args:
        user_id: User's UUID
        email: User's email address
        role: User's role
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "id": str(user_id),
        "email": email,
        "role": UserRole(role).value,
        "exp": now + expires_delta,
        "iat": now,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def verify_token(token: str) -> TokenPayload:
    """
    Verify and decode a JWT token.

    Only the signature, expiry and claim shape are checked; the database is
    never consulted.

    Args:
        token: JWT token string

    Returns:
        TokenPayload with the caller's identity

    Raises:
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the token is malformed, forged or incomplete
    """
    if not token:
        raise InvalidTokenError("Token missing")

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError()

    try:
        return TokenPayload.from_dict(payload)
    except ValueError:
        raise InvalidTokenError("Invalid token payload")
