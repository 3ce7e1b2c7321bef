# src/classifieds/api/v1/endpoints/users.py
"""Registration, login and seller lookup endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from classifieds.api.v1.dependencies import SessionDep
from classifieds.models import User
from classifieds.schemas.user import (
    LoginRequest,
    RegisterRequest,
    SellerResponse,
    SessionResponse,
)
from classifieds.services import credentials

router = APIRouter(tags=["users"])


def _session_response(user: User) -> SessionResponse:
    return SessionResponse(user_id=user.id, access_token=user.access_token, user_name=user.name)


@router.post(
    "/users/create",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_user(payload: RegisterRequest, db: SessionDep) -> SessionResponse:
    """Register a new account and return its access token."""
    user = credentials.register(db, payload.name, payload.email, payload.password)
    return _session_response(user)


@router.post("/sessions", response_model=SessionResponse)
def create_session(payload: LoginRequest, db: SessionDep) -> SessionResponse:
    """Log in with email and password; returns the user's existing token."""
    user = credentials.authenticate(db, payload.email, payload.password)
    return _session_response(user)


@router.get("/seller/{seller_id}", response_model=SellerResponse)
def get_seller(seller_id: int, db: SessionDep) -> SellerResponse:
    """Return the display name of a seller."""
    return SellerResponse(seller_name=credentials.get_seller_name(db, seller_id))
