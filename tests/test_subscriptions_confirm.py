import re
from unittest.mock import patch
from urllib.parse import urlsplit

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.repositories.subscription import get_subscriber_by_email


def _subscribe_and_get_confirmation_link(client, email_server) -> str:
    response = client.post(
        "/subscriptions",
        data={"name": "test", "email": "test@test.com"},
    )
    assert response.status_code == 200

    html_body = email_server.received_json()[-1]["HtmlBody"]
    link = re.search(r'href="([^"]+)"', html_body).group(1)
    parts = urlsplit(link)
    assert parts.netloc == "testserver"
    return f"{parts.path}?{parts.query}"


def test_confirmation_without_token_is_rejected_with_400(client):
    response = client.get("/subscriptions/confirm")

    assert response.status_code == 400
    assert response.content == b""


def test_confirmation_with_empty_token_is_rejected_with_400(client):
    response = client.get("/subscriptions/confirm?subscription_token=")

    assert response.status_code == 400


def test_confirmation_with_unknown_token_is_rejected_with_400(client, db: Session):
    response = client.get("/subscriptions/confirm?subscription_token=abcdefghijklmnopqrstuvwxy")

    assert response.status_code == 400
    assert response.content == b""


def test_the_link_returned_by_subscribe_returns_200(client, db: Session, email_server):
    confirmation_link = _subscribe_and_get_confirmation_link(client, email_server)

    response = client.get(confirmation_link)

    assert response.status_code == 200
    assert response.content == b""


def test_clicking_the_confirmation_link_confirms_the_subscriber(
    client, db: Session, email_server
):
    confirmation_link = _subscribe_and_get_confirmation_link(client, email_server)

    client.get(confirmation_link)

    db.expire_all()
    saved = get_subscriber_by_email(db, "test@test.com")
    assert saved.name == "test"
    assert saved.status == "confirmed"


def test_clicking_the_confirmation_link_twice_is_idempotent(client, db: Session, email_server):
    confirmation_link = _subscribe_and_get_confirmation_link(client, email_server)

    first = client.get(confirmation_link)
    second = client.get(confirmation_link)

    assert first.status_code == 200
    assert second.status_code == 200
    db.expire_all()
    assert get_subscriber_by_email(db, "test@test.com").status == "confirmed"


def test_confirming_one_subscriber_leaves_others_pending(client, db: Session, email_server):
    client.post("/subscriptions", data={"name": "other", "email": "other@test.com"})
    confirmation_link = _subscribe_and_get_confirmation_link(client, email_server)

    client.get(confirmation_link)

    db.expire_all()
    assert get_subscriber_by_email(db, "test@test.com").status == "confirmed"
    assert get_subscriber_by_email(db, "other@test.com").status == "pending_confirmation"


def test_confirmation_returns_500_when_the_database_fails(client, db: Session, email_server):
    confirmation_link = _subscribe_and_get_confirmation_link(client, email_server)

    with patch.object(
        db,
        "commit",
        side_effect=OperationalError("COMMIT", {}, Exception("connection lost")),
    ):
        response = client.get(confirmation_link)

    assert response.status_code == 500
    db.expire_all()
    assert get_subscriber_by_email(db, "test@test.com").status == "pending_confirmation"
