"""Registration, login and access token resolution."""
from __future__ import annotations

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from classifieds.core import security
from classifieds.core.errors import AuthError, NotFoundError, ValidationError
from classifieds.models import User
from classifieds.schemas.user import (
    NAME_MIN_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
)

__all__ = [
    "register",
    "authenticate",
    "verify_token",
    "get_user",
    "get_seller_name",
]

logger = logging.getLogger(__name__)


def _check_lengths(name: str, email: str, password: str) -> dict[str, str]:
    problems: dict[str, str] = {}
    if len(name) < NAME_MIN_LENGTH:
        problems["name"] = f"must be at least {NAME_MIN_LENGTH} characters"
    if not email:
        problems["email"] = "is required"
    if len(password) < PASSWORD_MIN_LENGTH:
        problems["password"] = f"must be at least {PASSWORD_MIN_LENGTH} characters"
    elif len(password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        problems["password"] = f"must be at most {PASSWORD_MAX_LENGTH} bytes"
    return problems


def register(
    db: Session, name: str, email: str, password: str, *, commit: bool = True
) -> User:
    """Create a user with a hashed password and a fresh access token.

    With ``commit=False`` the user is only flushed so that the caller can
    commit it together with other writes.

    Raises:
        ValidationError: If a field violates its length constraint or the
            name or email is already taken.
    """
    name = name.strip()
    email = email.strip()
    problems = _check_lengths(name, email, password)
    if problems:
        raise ValidationError("Could not create user", errors=problems)

    existing = db.query(User).filter(or_(User.name == name, User.email == email)).all()
    for user in existing:
        if user.name == name:
            problems["name"] = "is already taken"
        if user.email == email:
            problems["email"] = "is already registered"
    if problems:
        raise ValidationError("Could not create user", errors=problems)

    user = User(
        name=name,
        email=email,
        password_hash=security.hash_password(password),
        access_token=security.generate_access_token(),
    )
    db.add(user)
    try:
        if commit:
            db.commit()
        else:
            db.flush()
    except IntegrityError as err:
        db.rollback()
        raise ValidationError("Could not create user", errors={"user": "already exists"}) from err
    if commit:
        db.refresh(user)
    logger.info("Registered user %d", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user matching the credentials.

    The stored access token is returned unchanged; logging in never
    reissues it.

    Raises:
        AuthError: If no user has this email or the password does not match.
    """
    user = db.query(User).filter(User.email == email.strip()).first()
    if user is None or not security.verify_password(password, user.password_hash):
        logger.warning("Rejected login attempt")
        raise AuthError("Invalid email or password")
    return user


def verify_token(db: Session, token: str | None) -> User | None:
    """Resolve an access token to its user by exact match."""
    if not token:
        return None
    return db.query(User).filter(User.access_token == token).first()


def get_user(db: Session, user_id: int) -> User:
    """Return a user by primary key or raise ``NotFoundError``."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_seller_name(db: Session, seller_id: int) -> str:
    """Return the display name of a seller."""
    try:
        return get_user(db, seller_id).name
    except NotFoundError as err:
        raise NotFoundError("Seller not found") from err
