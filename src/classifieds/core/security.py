"""Password hashing and access token helpers built on bcrypt."""
from __future__ import annotations

import secrets

import bcrypt

from classifieds.core.settings import settings

# 64 random bytes, URL-safe base64 encoded.
ACCESS_TOKEN_BYTES = 64


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of the provided password."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash.

    Returns:
        True if the password matches; False otherwise, including when the
        stored hash is malformed.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def generate_access_token() -> str:
    """Return a new opaque, high-entropy access token."""
    return secrets.token_urlsafe(ACCESS_TOKEN_BYTES)
