# routes/auth.py
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from auth_utils import (
    SESSION_TTL,
    InvalidSessionToken,
    create_session_token,
    decode_session_token,
    get_router_config,
    verify_password,
)
from database import get_db
from models import User
from utils.app_config import RouterConfig, is_production

logger = logging.getLogger("sitebuilder.auth")

# ─────────────────────────────────────────────
# 🔐 Authentifizierungs-Router
# ─────────────────────────────────────────────
router = APIRouter(prefix="/api/auth", tags=["Authentication"])


class LoginIn(BaseModel):
    username: str = ""
    password: str = ""


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    """Admin-Benutzer mit passendem Passwort oder None."""
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password_hash):
        return None
    user.last_login = datetime.now(timezone.utc)
    db.commit()
    return user


def set_session_cookie(response: Response, token: str, config: RouterConfig) -> None:
    response.set_cookie(
        key=config.session_cookie,
        value=token,
        max_age=int(SESSION_TTL.total_seconds()),
        path="/",
        httponly=True,
        secure=is_production(),
        samesite="lax",
    )


def clear_session_cookie(response: Response, config: RouterConfig) -> None:
    response.delete_cookie(
        key=config.session_cookie,
        path="/",
        httponly=True,
        secure=is_production(),
        samesite="lax",
    )


# ─────────────────────────────────────────────
# 🔑 Login (JSON)
# ─────────────────────────────────────────────
@router.post("/login")
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    config: RouterConfig = Depends(get_router_config),
):
    if not payload.username or not payload.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    user = authenticate(db, payload.username, payload.password)
    if not user:
        logger.info("Failed login for %s", payload.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    response = JSONResponse(
        {"success": True, "user": {"id": user.id, "username": user.username}}
    )
    set_session_cookie(response, create_session_token(user.id, user.username), config)
    logger.info("Admin %s logged in", user.username)
    return response


# ─────────────────────────────────────────────
# 🚪 Logout
# ─────────────────────────────────────────────
@router.get("/logout")
def logout(config: RouterConfig = Depends(get_router_config)):
    response = JSONResponse({"success": True, "message": "Logged out successfully"})
    clear_session_cookie(response, config)
    return response


# ─────────────────────────────────────────────
# ✅ Token prüfen
# ─────────────────────────────────────────────
@router.get("/verify")
def verify(request: Request, config: RouterConfig = Depends(get_router_config)):
    token = request.cookies.get(config.session_cookie)
    if not token:
        return JSONResponse(
            {"authenticated": False, "error": "No token provided"}, status_code=401
        )
    try:
        claims = decode_session_token(token)
    except InvalidSessionToken as e:
        return JSONResponse({"authenticated": False, "error": str(e)}, status_code=401)

    return {
        "authenticated": True,
        "user": {"id": claims["userId"], "username": claims["username"]},
    }
