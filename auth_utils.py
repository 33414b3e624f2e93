# auth_utils.py
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from dotenv import load_dotenv
from fastapi import Depends, HTTPException, Request, status
from passlib.hash import bcrypt

from utils.app_config import RouterConfig, load_router_config

# 🔧 Umgebungsvariablen laden
load_dotenv()

JWT_SECRET: str = os.getenv("JWT_SECRET", "dev-secret")
JWT_ALGORITHM = "HS256"
SESSION_TTL = timedelta(days=1)


class InvalidSessionToken(Exception):
    """Session token is malformed, forged or expired."""


# ---------------------------------------------------------------------
# 🔐 Passwort-Hash
# ---------------------------------------------------------------------
def hash_password(password: str) -> str:
    return bcrypt.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.verify(password, password_hash)
    except ValueError:
        # unknown or broken hash format
        return False


# ---------------------------------------------------------------------
# 🔑 Session-Token (JWT, HS256)
# ---------------------------------------------------------------------
def create_session_token(user_id: int, username: str, ttl: timedelta = SESSION_TTL) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "username": username,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_session_token(token: str) -> dict[str, Any]:
    """Verifies signature and expiry; raises InvalidSessionToken otherwise."""
    try:
        claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise InvalidSessionToken("Session expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidSessionToken("Invalid token") from exc

    if "userId" not in claims or "username" not in claims:
        raise InvalidSessionToken("Invalid token")
    return claims


# ---------------------------------------------------------------------
# 👤 Aktueller Admin (aus Cookie)
# ---------------------------------------------------------------------
def get_router_config(request: Request) -> RouterConfig:
    config = getattr(request.app.state, "router_config", None)
    return config or load_router_config()


def session_user(request: Request) -> Optional[dict[str, Any]]:
    """Decoded admin from the session cookie, or None."""
    token = request.cookies.get(get_router_config(request).session_cookie)
    if not token:
        return None
    try:
        claims = decode_session_token(token)
    except InvalidSessionToken:
        return None
    return {"id": claims["userId"], "username": claims["username"]}


def require_admin(request: Request, config: RouterConfig = Depends(get_router_config)) -> dict[str, Any]:
    """
    Authoritative admin check for API routes.

    The middleware only checks that a cookie is present; this dependency
    verifies it.
    """
    token = request.cookies.get(config.session_cookie)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        claims = decode_session_token(token)
    except InvalidSessionToken as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return {"id": claims["userId"], "username": claims["username"]}
