import pathlib
import sys
from datetime import timedelta

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

import jwt
from fastapi.testclient import TestClient

from api.app.auth import create_access_token, decode_token, hash_password, verify_password
from api.app.main import app
from api.app.schemas import OwnerOut
from config import get_settings


def test_register_returns_owner_and_token(client):
    resp = client.post(
        "/api/register",
        json={"username": "chef@example.com", "password": "pw-123", "businessName": "Chez Chef"},
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["username"] == "chef@example.com"
    assert data["businessName"] == "Chez Chef"
    assert "password" not in data and "passwordHash" not in data
    assert resp.cookies.get("token") == data["token"]
    assert "httponly" in resp.headers["set-cookie"].lower()


def test_token_claims(owner):
    settings = get_settings()
    claims = jwt.decode(owner["token"], settings.secret_key, algorithms=[settings.jwt_algorithm])
    assert claims["sub"] == str(owner["id"])
    assert claims["username"] == owner["username"]
    assert claims["businessName"] == "Joe's Diner"
    assert "exp" in claims


def test_duplicate_username(client, owner):
    resp = client.post(
        "/api/register",
        json={"username": owner["username"], "password": "other", "businessName": "Other"},
    )
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["message"] == "Username already exists"
    assert error["details"] == {"field": "username"}


def test_register_missing_field(client):
    resp = client.post("/api/register", json={"username": "x@example.com", "password": "pw"})
    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["field"] == "businessName"


def test_login_and_current_user(owner):
    fresh = TestClient(app)
    resp = fresh.post("/api/login", json={"username": owner["username"], "password": "s3cret-pass"})
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == owner["id"]

    me = fresh.get("/api/user")
    assert me.status_code == 200
    assert me.json()["data"] == {
        "id": owner["id"],
        "username": owner["username"],
        "businessName": "Joe's Diner",
    }


def test_login_bad_credentials(owner):
    fresh = TestClient(app)
    for creds in (
        {"username": owner["username"], "password": "wrong"},
        {"username": "nobody@example.com", "password": "s3cret-pass"},
    ):
        resp = fresh.post("/api/login", json=creds)
        assert resp.status_code == 401
        assert resp.json()["error"]["message"] == "Invalid credentials"
    assert "token" not in fresh.cookies


def test_bearer_header_authenticates(owner):
    anon = TestClient(app)
    resp = anon.get("/api/user", headers={"Authorization": f"Bearer {owner['token']}"})
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == owner["id"]


def test_expired_token_rejected(owner):
    token = create_access_token(OwnerOut(**owner), expires_delta=timedelta(seconds=-5))
    anon = TestClient(app)
    resp = anon.get("/api/user", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Unauthorized - Invalid token"


def test_token_for_deleted_owner(client):
    token = create_access_token(OwnerOut(id=999, username="ghost@example.com", business_name="Ghost"))
    resp = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "User not found"


def test_logout_clears_cookie(owner, client):
    resp = client.post("/api/logout")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"message": "Logged out"}
    assert client.get("/api/user").status_code == 401


def test_password_helpers():
    hashed = hash_password("secret")
    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("nope", hashed)
    assert not verify_password("secret", "not-a-hash")


def test_decode_token_roundtrip(owner):
    assert decode_token(owner["token"])["sub"] == str(owner["id"])
