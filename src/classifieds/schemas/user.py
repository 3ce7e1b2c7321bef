"""User and session Pydantic schemas."""

from pydantic import Field

from classifieds.schemas.common import CamelModel

NAME_MIN_LENGTH = 2
PASSWORD_MIN_LENGTH = 6
# bcrypt only considers the first 72 bytes of a password.
PASSWORD_MAX_LENGTH = 72


class RegisterRequest(CamelModel):
    """Schema for registering a new account."""

    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=100)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)


class LoginRequest(CamelModel):
    """Schema for login submissions."""

    email: str
    password: str


class SessionResponse(CamelModel):
    """Identity and access token returned by registration and login."""

    user_id: int
    access_token: str
    user_name: str


class SellerResponse(CamelModel):
    """Public display name of a seller."""

    seller_name: str
