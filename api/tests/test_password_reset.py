import logging
import pathlib
import sys
from datetime import datetime, timedelta

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

import pytest
from fastapi.testclient import TestClient

from api.app.errors import NotFound, ValidationError
from api.app.main import app
from api.app.schemas import LoginIn, RegisterIn
from api.app.services.accounts import AccountService
from api.tests.fakes import InMemoryOwnerRepo


def _token_from(link: str) -> str:
    return link.rsplit("/", 1)[-1]


def test_forgot_password_issues_link(owner, client, outbox):
    resp = client.post("/api/forgot-password", json={"email": owner["username"]})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["message"] == "Reset link generated"
    assert data["resetLink"].startswith("http://testserver/reset-password/")
    assert len(_token_from(data["resetLink"])) == 64

    event, payload, target = outbox[-1]
    assert event == "password_reset"
    assert target == owner["username"]
    assert payload["link"] == data["resetLink"]


def test_forgot_password_unknown_email(client, outbox):
    resp = client.post("/api/forgot-password", json={"email": "nobody@example.com"})
    assert resp.status_code == 404
    assert outbox == []


def test_reset_password_flow(owner, client):
    link = client.post("/api/forgot-password", json={"email": owner["username"]}).json()["data"]["resetLink"]
    token = _token_from(link)

    resp = client.post("/api/reset-password", json={"token": token, "newPassword": "brand-new"})
    assert resp.status_code == 200
    assert resp.json()["data"] == {"message": "Password updated"}

    fresh = TestClient(app)
    old = fresh.post("/api/login", json={"username": owner["username"], "password": "s3cret-pass"})
    assert old.status_code == 401
    new = fresh.post("/api/login", json={"username": owner["username"], "password": "brand-new"})
    assert new.status_code == 200

    again = client.post("/api/reset-password", json={"token": token, "newPassword": "third"})
    assert again.status_code == 400
    assert again.json()["error"]["details"] == {"field": "token"}


def test_reset_password_unknown_token(client):
    resp = client.post("/api/reset-password", json={"token": "deadbeef", "newPassword": "x"})
    assert resp.status_code == 404


class _Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def test_reset_token_expires():
    clock = _Clock(datetime(2026, 5, 1, 9, 0, 0))
    accounts = AccountService(InMemoryOwnerRepo(), reset_ttl=timedelta(minutes=60), clock=clock)
    accounts.register(RegisterIn(username="a@example.com", password="pw", business_name="A"))
    token = _token_from(accounts.request_password_reset("a@example.com", "http://x/"))

    clock.now += timedelta(minutes=61)
    with pytest.raises(ValidationError) as excinfo:
        accounts.reset_password(token, "new-pw")
    assert excinfo.value.field == "token"
    accounts.login(LoginIn(username="a@example.com", password="pw"))


def test_reset_token_valid_at_ttl_edge():
    clock = _Clock(datetime(2026, 5, 1, 9, 0, 0))
    accounts = AccountService(InMemoryOwnerRepo(), reset_ttl=timedelta(minutes=60), clock=clock)
    accounts.register(RegisterIn(username="a@example.com", password="pw", business_name="A"))
    link = accounts.request_password_reset("a@example.com", "http://x/")
    assert link.startswith("http://x/reset-password/")

    clock.now += timedelta(minutes=60)
    accounts.reset_password(_token_from(link), "new-pw")
    assert accounts.login(LoginIn(username="a@example.com", password="new-pw")).username == "a@example.com"


def test_unknown_email_service_level():
    accounts = AccountService(InMemoryOwnerRepo())
    with pytest.raises(NotFound):
        accounts.request_password_reset("missing@example.com", "http://x")


def test_email_provider_logs_without_keeping_links(caplog):
    from api.app.providers import email_stub

    link = "http://testserver/reset-password/" + "ab" * 32
    with caplog.at_level(logging.INFO, logger="notify"):
        email_stub.send("password_reset", {"subject": "Reset your password", "link": link}, "a@example.com")
    assert any("Reset your password" in m for m in caplog.messages)
    assert all(link not in m for m in caplog.messages)
    assert not hasattr(email_stub, "SENT")
