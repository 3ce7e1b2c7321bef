# tests/test_seed.py
"""Tests for the explicit store reset/seed operations."""

import json

import pytest
from sqlalchemy.orm import sessionmaker

from classifieds.core.errors import ValidationError
from classifieds.models import Ad, Conversation, Message, User
from classifieds.scripts import seed as seed_script
from classifieds.services.seed import reset_store, seed_store

SEED_DOCUMENT = {
    "users": [
        {"name": "anna", "email": "anna@example.com", "password": "secret1"},
        {"name": "bert", "email": "bert@example.com", "password": "secret2"},
    ],
    "ads": [
        {
            "title": "Bike",
            "info": "Red",
            "price": 100,
            "delivery": "pickup",
            "seller": "anna",
            "imageUrl": "/uploads/bike.png",
            "imageId": "bike",
        },
        {
            "title": "Lamp",
            "info": "Old",
            "price": 20,
            "category": "home",
            "delivery": "post",
            "seller": "bert",
            "imageUrl": "/uploads/lamp.png",
            "imageId": "lamp",
        },
    ],
}


def test_seed_store_creates_users_and_ads(db_session) -> None:
    report = seed_store(db_session, SEED_DOCUMENT)
    assert (report.users, report.ads) == (2, 2)

    lamp = db_session.query(Ad).filter(Ad.title == "Lamp").one()
    assert lamp.seller.name == "bert"
    assert lamp.category == "home"


def test_seed_store_uses_existing_sellers(db_session, seller) -> None:
    document = {"ads": [dict(SEED_DOCUMENT["ads"][0], seller=seller.name)]}
    report = seed_store(db_session, document)
    assert (report.users, report.ads) == (0, 1)


def test_seed_store_rejects_unknown_seller(db_session) -> None:
    document = {"ads": [dict(SEED_DOCUMENT["ads"][0], seller="nobody")]}
    with pytest.raises(ValidationError):
        seed_store(db_session, document)


def test_seed_store_rejects_malformed_user(db_session) -> None:
    document = {"users": [SEED_DOCUMENT["users"][0], {"name": "bert", "email": "b@example.com"}]}
    with pytest.raises(ValidationError) as exc_info:
        seed_store(db_session, document)
    assert exc_info.value.errors == {"users": {1: "requires name, email and password"}}
    assert db_session.query(User).count() == 0


def test_seed_store_is_all_or_nothing(db_session) -> None:
    document = {
        "users": SEED_DOCUMENT["users"],
        "ads": [SEED_DOCUMENT["ads"][0], dict(SEED_DOCUMENT["ads"][1], price="abc")],
    }
    with pytest.raises(ValidationError) as exc_info:
        seed_store(db_session, document)
    assert 1 in exc_info.value.errors["ads"]
    assert db_session.query(User).count() == 0
    assert db_session.query(Ad).count() == 0


def test_reset_store_removes_everything(db_session, conversation, buyer, make_message) -> None:
    make_message(conversation, buyer, "hello")

    reset_store(db_session)

    for model in (Message, Conversation, Ad, User):
        assert db_session.query(model).count() == 0


def _use_test_database(monkeypatch, engine):
    SessionLocal = sessionmaker(bind=engine)
    monkeypatch.setattr(seed_script, "SessionLocal", SessionLocal)
    monkeypatch.setattr(seed_script, "create_tables", lambda: None)
    return SessionLocal


def test_seed_script(engine, tmp_path, monkeypatch, capsys) -> None:
    seed_file = tmp_path / "seed.json"
    seed_file.write_text(json.dumps(SEED_DOCUMENT), encoding="utf-8")
    SessionLocal = _use_test_database(monkeypatch, engine)

    assert seed_script.main(["--reset", str(seed_file)]) == 0
    assert "created 2 users and 2 ads" in capsys.readouterr().out

    with SessionLocal() as db:
        assert db.query(Ad).count() == 2


def test_seed_script_failure_creates_nothing(engine, tmp_path, monkeypatch, capsys) -> None:
    document = {
        "users": [SEED_DOCUMENT["users"][0]],
        "ads": [dict(SEED_DOCUMENT["ads"][0], price="abc")],
    }
    seed_file = tmp_path / "seed.json"
    seed_file.write_text(json.dumps(document), encoding="utf-8")
    SessionLocal = _use_test_database(monkeypatch, engine)

    assert seed_script.main([str(seed_file)]) == 1
    assert "[seed] ERROR: Malformed ad in seed data" in capsys.readouterr().err

    with SessionLocal() as db:
        assert db.query(User).count() == 0


def test_seed_script_failed_reset_keeps_existing_rows(engine, tmp_path, monkeypatch, ad) -> None:
    ad_id = ad.id
    document = {"ads": [dict(SEED_DOCUMENT["ads"][0], seller="nobody")]}
    seed_file = tmp_path / "seed.json"
    seed_file.write_text(json.dumps(document), encoding="utf-8")
    SessionLocal = _use_test_database(monkeypatch, engine)

    assert seed_script.main(["--reset", str(seed_file)]) == 1

    with SessionLocal() as db:
        assert db.get(Ad, ad_id) is not None
        assert db.query(User).count() == 1


def test_seed_script_requires_an_action() -> None:
    with pytest.raises(SystemExit):
        seed_script.main([])
