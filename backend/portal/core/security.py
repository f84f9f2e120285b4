"""
Security utilities for authentication and authorization.

Provides password hashing (bcrypt) and JWT token management.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from portal.core.config import settings

# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise. Stored values that are
        not a recognisable hash, and candidates bcrypt would truncate, never
        match.
    """
    if not hashed_password or password_too_long(plain_password):
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Raises ValueError for passwords longer than ``BCRYPT_MAX_BYTES``;
    callers validate length first.
    """
    if password_too_long(password):
        raise ValueError(f"password exceeds {BCRYPT_MAX_BYTES} bytes")
    return pwd_context.hash(password)


def create_access_token(
    subject: str,
    claims: Optional[dict] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a session token for ``subject`` (a user id, or a demo email).

    ``claims`` carries the identity hints (email, name, role, profile); they
    are re-checked against the store whenever the token is used.
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = dict(claims or {})
    payload.update({
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    })

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """
    Verify signature and expiry of a session token.

    Returns the payload, or None when the token is tampered, expired or
    lacks a subject.
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except InvalidTokenError:
        return None
