# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from classifieds.db.session import Base
from classifieds.db.session import get_db as app_get_session
from classifieds.main import app as fastapi_app
from classifieds.models import Ad, Conversation, Message, User
from classifieds.services import credentials
from classifieds.services.images import ImageStore, get_image_store

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "password1"

_USER_COUNTER = count(1)
_BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def image_store(tmp_path: Path) -> ImageStore:
    return ImageStore(tmp_path / "uploads", "/uploads")


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI, db_session: Session, image_store: ImageStore
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    original_probe = app.state.readiness_probe
    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_image_store] = lambda: image_store
    # The readiness probe would otherwise hit the module-level engine.
    app.state.readiness_probe = lambda: True
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_image_store, None)
        app.state.readiness_probe = original_probe


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory registering users through the credential service."""

    def _make_user(name: str | None = None, email: str | None = None) -> User:
        n = next(_USER_COUNTER)
        return credentials.register(
            db_session,
            name or f"user{n}",
            email or f"user{n}@example.com",
            TEST_PASSWORD,
        )

    return _make_user


@pytest.fixture()
def seller(make_user: Callable[..., User]) -> User:
    return make_user("Sally Seller", "sally@example.com")


@pytest.fixture()
def buyer(make_user: Callable[..., User]) -> User:
    return make_user("Bob Buyer", "bob@example.com")


@pytest.fixture()
def seller_headers(seller: User) -> dict[str, str]:
    return {"Authorization": seller.access_token}


@pytest.fixture()
def buyer_headers(buyer: User) -> dict[str, str]:
    return {"Authorization": buyer.access_token}


@pytest.fixture()
def make_ad(db_session: Session) -> Callable[..., Ad]:
    """Return a factory inserting ads; ``minutes`` offsets ``created_at``."""

    def _make_ad(seller: User, title: str = "Bike", minutes: int = 0, **fields) -> Ad:
        ad = Ad(
            title=title,
            info=fields.pop("info", "Barely used"),
            price=fields.pop("price", 100.0),
            category=fields.pop("category", "sports"),
            location=fields.pop("location", "Stockholm"),
            delivery=fields.pop("delivery", "pickup"),
            image_url=fields.pop("image_url", "/uploads/bike.png"),
            image_id=fields.pop("image_id", "bike"),
            seller_id=seller.id,
            created_at=_BASE_TIME + timedelta(minutes=minutes),
        )
        db_session.add(ad)
        db_session.commit()
        db_session.refresh(ad)
        return ad

    return _make_ad


@pytest.fixture()
def ad(make_ad: Callable[..., Ad], seller: User) -> Ad:
    return make_ad(seller)


@pytest.fixture()
def make_conversation(db_session: Session) -> Callable[..., Conversation]:
    def _make_conversation(
        ad: Ad, seller: User, buyer: User, minutes: int = 0
    ) -> Conversation:
        conversation = Conversation(
            name=ad.title,
            ad_id=ad.id,
            seller_id=seller.id,
            buyer_id=buyer.id,
            created_at=_BASE_TIME + timedelta(minutes=minutes),
        )
        db_session.add(conversation)
        db_session.commit()
        db_session.refresh(conversation)
        return conversation

    return _make_conversation


@pytest.fixture()
def conversation(
    make_conversation: Callable[..., Conversation], ad: Ad, seller: User, buyer: User
) -> Conversation:
    return make_conversation(ad, seller, buyer)


@pytest.fixture()
def make_message(db_session: Session) -> Callable[..., Message]:
    """Return a factory inserting messages; ``seconds`` offsets ``created_at``."""

    def _make_message(
        conversation: Conversation, sender: User, text: str, seconds: int = 0
    ) -> Message:
        message = Message(
            message=text,
            sender_id=sender.id,
            conversation_id=conversation.id,
            created_at=_BASE_TIME + timedelta(seconds=seconds),
        )
        db_session.add(message)
        db_session.commit()
        db_session.refresh(message)
        return message

    return _make_message
