from datetime import timedelta

import jwt
import pytest

from auth_utils import (
    InvalidSessionToken,
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = hash_password("hunter2")
    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_rejects_broken_hash():
    assert not verify_password("x", "not-a-bcrypt-hash")


def test_session_token_claims():
    claims = decode_session_token(create_session_token(7, "admin"))
    assert claims["userId"] == 7
    assert claims["username"] == "admin"
    assert claims["exp"] > claims["iat"]


def test_expired_token_is_rejected():
    token = create_session_token(1, "admin", ttl=timedelta(seconds=-5))
    with pytest.raises(InvalidSessionToken, match="expired"):
        decode_session_token(token)


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode({"userId": 1, "username": "admin"}, "other-secret", algorithm="HS256")
    with pytest.raises(InvalidSessionToken, match="Invalid token"):
        decode_session_token(token)


# ─────────────────────────────────────────────
# 🔑 /api/auth
# ─────────────────────────────────────────────
def test_login_sets_session_cookie(client, admin_user, admin_password, cookie_name):
    res = client.post("/api/auth/login", json={"username": "admin", "password": admin_password})
    assert res.status_code == 200
    assert res.json()["user"]["username"] == "admin"
    assert cookie_name in res.cookies
    set_cookie = res.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "max-age=86400" in set_cookie


def test_login_updates_last_login(client, admin_user, admin_password, db):
    client.post("/api/auth/login", json={"username": "admin", "password": admin_password})
    db.expire_all()
    db.refresh(admin_user)
    assert admin_user.last_login is not None


def test_login_requires_both_fields(client):
    res = client.post("/api/auth/login", json={"username": "admin"})
    assert res.status_code == 400
    assert res.json() == {"error": "Username and password are required"}


def test_login_wrong_password(client, admin_user):
    res = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid credentials"}


def test_login_unknown_user(client):
    res = client.post("/api/auth/login", json={"username": "ghost", "password": "x"})
    assert res.status_code == 401


def test_verify_without_token(client):
    res = client.get("/api/auth/verify")
    assert res.status_code == 401
    assert res.json() == {"authenticated": False, "error": "No token provided"}


def test_verify_with_valid_token(admin_client, admin_user):
    res = admin_client.get("/api/auth/verify")
    assert res.status_code == 200
    assert res.json() == {
        "authenticated": True,
        "user": {"id": admin_user.id, "username": "admin"},
    }


def test_verify_with_forged_token(client, cookie_name):
    client.cookies.set(cookie_name, "abc.def.ghi")
    res = client.get("/api/auth/verify")
    assert res.status_code == 401
    assert res.json()["authenticated"] is False


def test_logout_clears_cookie(admin_client, cookie_name):
    res = admin_client.get("/api/auth/logout")
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert f'{cookie_name}=""' in res.headers["set-cookie"]


def test_require_admin_rejects_missing_and_forged_tokens(client, cookie_name):
    assert client.get("/api/admin/tenants").status_code == 401
    client.cookies.set(cookie_name, "forged")
    res = client.get("/api/admin/tenants")
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid token"}
