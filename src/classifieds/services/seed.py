"""Administrative reset and seeding of the store.

These operations are destructive and only ever run when explicitly invoked
(see ``classifieds.scripts.seed``); nothing here executes on process start.

Seed documents are JSON objects of the form::

    {
      "users": [{"name": "anna", "email": "anna@example.com", "password": "secret1"}],
      "ads": [{"title": "Bike", "info": "Red", "price": 100, "delivery": "pickup",
               "seller": "anna", "imageUrl": "/uploads/bike.png", "imageId": "bike"}]
    }

Ads name their seller by user name, since ids are assigned on insert.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import delete
from sqlalchemy.orm import Session

from classifieds.core.errors import ValidationError
from classifieds.models import Ad, Conversation, Message, User
from classifieds.schemas.ad import AdCreate
from classifieds.services import credentials
from classifieds.services.ads import create_ad
from classifieds.services.images import StoredImage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedReport:
    """Counts of rows created by ``seed_store``."""

    users: int
    ads: int


def reset_store(db: Session, *, commit: bool = True) -> None:
    """Delete every row, children before parents."""
    for model in (Message, Conversation, Ad, User):
        db.execute(delete(model))
    if commit:
        db.commit()
    logger.warning("Store reset: all users, ads, conversations and messages deleted")


def _seed_users(db: Session, entries: list[dict[str, Any]]) -> dict[str, int]:
    sellers: dict[str, int] = {}
    for position, entry in enumerate(entries):
        try:
            name, email, password = entry["name"], entry["email"], entry["password"]
        except (KeyError, TypeError) as err:
            raise ValidationError(
                "Malformed user in seed data",
                errors={"users": {position: "requires name, email and password"}},
            ) from err
        if not all(isinstance(value, str) for value in (name, email, password)):
            raise ValidationError(
                "Malformed user in seed data", errors={"users": {position: "expected strings"}}
            )
        user = credentials.register(db, name, email, password, commit=False)
        sellers[user.name] = user.id
    return sellers


def _seed_ad(db: Session, position: int, entry: Any, sellers: dict[str, int]) -> None:
    if not isinstance(entry, dict):
        raise ValidationError("Malformed ad in seed data", errors={"ads": {position: entry}})
    seller_name = entry.get("seller")
    seller_id = sellers.get(seller_name)
    if seller_id is None:
        existing = db.query(User).filter(User.name == seller_name).first()
        if existing is None:
            raise ValidationError("Unknown seller in seed data", errors={"seller": seller_name})
        seller_id = existing.id
    image_url = entry.get("imageUrl") or entry.get("image_url")
    image_id = entry.get("imageId") or entry.get("image_id")
    image = StoredImage(image_id=image_id, image_url=image_url) if image_url and image_id else None
    try:
        fields = AdCreate.model_validate({**entry, "seller": seller_id})
    except SchemaValidationError as err:
        raise ValidationError(
            "Malformed ad in seed data",
            errors={"ads": {position: err.errors(include_url=False)}},
        ) from err
    create_ad(db, fields, image, commit=False)


def seed_store(db: Session, document: dict[str, Any], *, reset: bool = False) -> SeedReport:
    """Create the users and ads described by a seed document.

    Everything, including the optional reset, happens in one transaction:
    either the whole document is stored or nothing changes.

    Raises:
        ValidationError: If an entry is malformed, an ad names a seller that
            is neither in the document nor already stored, or an ad lacks an
            image reference.
    """
    if not isinstance(document, dict):
        raise ValidationError("Seed data must be a JSON object")

    try:
        if reset:
            reset_store(db, commit=False)
        sellers = _seed_users(db, document.get("users", []))
        ads = document.get("ads", [])
        for position, entry in enumerate(ads):
            _seed_ad(db, position, entry, sellers)
        db.commit()
    except Exception:
        db.rollback()
        raise

    report = SeedReport(users=len(sellers), ads=len(ads))
    logger.info("Seeded %d users and %d ads", report.users, report.ads)
    return report
