"""
Security Service

Handles password hashing and access token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. JWT access tokens carrying the caller's identity claims
3. Token verification that never raises to the caller

Usage:
    from bookreviews.services.security import hash_password, verify_password

    hashed = hash_password("secret123")
    is_valid = verify_password("secret123", hashed)
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from bookreviews.config import Settings, get_settings

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# deprecated="auto" means old hashes are automatically upgraded
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("secret123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Uses constant-time comparison to prevent timing attacks.
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# Access Tokens
# -------------------------------------------------------------------------
ALGORITHM = "HS256"
TOKEN_TYPE = "access"


@dataclass(frozen=True)
class TokenIdentity:
    """Identity claims carried by a verified access token."""

    user_id: str
    username: str
    email: str


def create_access_token(
    user_id: str,
    username: str,
    email: str,
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """
    Create a signed access token for a user.

    Args:
        user_id: Stored as the ``sub`` claim
        username: Display name claim
        email: Email claim
        expires_delta: Optional custom lifetime (default from settings, 24h)
        settings: Signing key and lifetime; defaults to the environment settings

    Returns:
        Encoded JWT string

    Example:
        >>> token = create_access_token("3f2a...", "reader", "reader@example.com")
        >>> token.count(".") == 2
        True
    """
    settings = settings or get_settings()
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.access_token_expire_hours)

    to_encode = {
        "sub": user_id,
        "username": username,
        "email": email,
        "type": TOKEN_TYPE,
        "exp": datetime.now(UTC) + expires_delta,
    }

    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str, settings: Settings | None = None) -> dict | None:
    """
    Decode and validate a JWT token against the signing key in settings.

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def verify_access_token(token: str, settings: Settings | None = None) -> TokenIdentity | None:
    """
    Verify an access token and extract the identity claims.

    Returns:
        TokenIdentity if the token is valid, unexpired and of type
        "access"; None otherwise
    """
    payload = decode_token(token, settings)
    if payload is None:
        return None

    if payload.get("type") != TOKEN_TYPE:
        logger.warning("Token type mismatch: expected access token")
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return TokenIdentity(
        user_id=str(user_id),
        username=payload.get("username", ""),
        email=payload.get("email", ""),
    )
