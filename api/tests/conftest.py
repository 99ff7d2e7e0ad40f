"""Fixtures for API tests."""

from __future__ import annotations

import pathlib
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

import api.app.db as app_db  # noqa: E402
from api.app.main import app  # noqa: E402
from api.app.models import Base  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_database():
    """Remove rows written by the previous test."""
    yield
    with app_db.engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db_session():
    session = app_db.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def register(client: TestClient, username: str = "owner@example.com", **extra) -> dict:
    payload = {
        "username": username,
        "password": "s3cret-pass",
        "businessName": extra.pop("business_name", "Joe's Diner"),
    }
    payload.update(extra)
    resp = client.post("/api/register", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture
def owner(client):
    """Register an owner; ``client`` keeps the auth cookie."""
    return register(client)


@pytest.fixture
def register_owner():
    return register


@pytest.fixture
def outbox(monkeypatch):
    """Capture e-mails handed to the provider instead of logging them."""
    from api.app.providers import email_stub

    sent = []

    def record(event, payload, target):
        sent.append((event, payload, target))

    monkeypatch.setattr(email_stub, "send", record)
    return sent
