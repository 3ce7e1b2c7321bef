"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from classifieds.core.errors import AuthError
from classifieds.db.session import get_db
from classifieds.models import User
from classifieds.services.credentials import verify_token
from classifieds.services.images import ImageStore, get_image_store

# The raw Authorization header carries the opaque access token.
token_header = APIKeyHeader(name="Authorization", auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _extract_token(header_value: str | None) -> str | None:
    """Return the token from an Authorization header value.

    A leading ``Bearer`` scheme word is accepted and stripped.
    """
    if header_value is None:
        return None
    value = header_value.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer" and rest:
        value = rest.strip()
    return value or None


def get_current_user(
    authorization: Annotated[str | None, Depends(token_header)],
    db: SessionDep,
) -> User:
    """Resolve the caller's access token to a user.

    This only checks that the caller is someone; it does not check that the
    caller may act on a particular resource.

    Raises:
        AuthError: If the header is absent or the token is unknown.
    """
    token = _extract_token(authorization)
    if token is None:
        raise AuthError("Access token missing")
    user = verify_token(db, token)
    if user is None:
        raise AuthError("Invalid access token")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
ImageStoreDep = Annotated[ImageStore, Depends(get_image_store)]
