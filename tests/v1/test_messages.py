# mypy: ignore-errors
# tests/v1/test_messages.py
"""Tests for message-related endpoints."""

import pytest
from fastapi import status

from classifieds.models import Message


def _send(client, headers, text, sender_id, conversation_id):
    return client.post(
        "/message",
        json={"message": text, "name": sender_id, "conversation": conversation_id},
        headers=headers,
    )


def test_send_message(client, conversation, buyer, buyer_headers, db_session) -> None:
    response = _send(client, buyer_headers, "Is it still available?", buyer.id, conversation.id)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is True

    message = db_session.get(Message, data["messageId"])
    assert message.sender_id == buyer.id
    assert message.conversation_id == conversation.id


@pytest.mark.parametrize(
    ("length", "expected"),
    [
        (1, status.HTTP_200_OK),
        (140, status.HTTP_200_OK),
        (141, status.HTTP_400_BAD_REQUEST),
        (0, status.HTTP_400_BAD_REQUEST),
    ],
)
def test_message_length_bounds(client, conversation, buyer, buyer_headers, length, expected) -> None:
    response = _send(client, buyer_headers, "x" * length, buyer.id, conversation.id)
    assert response.status_code == expected


def test_send_message_unknown_conversation(client, buyer, buyer_headers) -> None:
    response = _send(client, buyer_headers, "hello", buyer.id, 9999)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"] == {"conversation": "does not exist"}


def test_send_message_unknown_sender(client, conversation, buyer_headers) -> None:
    response = _send(client, buyer_headers, "hello", 9999, conversation.id)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"] == {"name": "does not exist"}


def test_send_message_from_non_participant(client, conversation, make_user, buyer_headers) -> None:
    # Participation is not verified.
    outsider = make_user()
    response = _send(client, buyer_headers, "hi there", outsider.id, conversation.id)
    assert response.status_code == status.HTTP_200_OK


def test_send_message_requires_token(client, conversation, buyer) -> None:
    response = client.post(
        "/message",
        json={"message": "hello", "name": buyer.id, "conversation": conversation.id},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_sent_messages_show_in_detail(client, conversation, seller, buyer, buyer_headers) -> None:
    _send(client, buyer_headers, "Hi!", buyer.id, conversation.id)
    _send(client, buyer_headers, "Hello", seller.id, conversation.id)

    data = client.get(f"/conversation/{conversation.id}", headers=buyer_headers).json()
    assert [(m["message"], m["senderId"]) for m in data["messages"]] == [
        ("Hi!", buyer.id),
        ("Hello", seller.id),
    ]
