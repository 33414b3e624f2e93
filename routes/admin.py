# =============================================================================
# 📊 routes/admin.py
# -----------------------------------------------------------------------------
# Admin-Oberfläche (HTML):
#   • Login / Logout
#   • Dashboard mit allen Tenant-Websites
#   • Kontaktanfragen je Tenant
# Die Middleware prüft nur, ob ein Cookie existiert; hier wird das Token
# tatsächlich geprüft.
# =============================================================================

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from auth_utils import create_session_token, get_router_config, session_user
from database import get_db
from models import ENQUIRY_STATUSES, Enquiry, Tenant
from routes.auth import authenticate, clear_session_cookie, set_session_cookie
from utils.app_config import TEMPLATES_DIR, RouterConfig
from utils.site_templates import list_site_templates

router = APIRouter(prefix="/admin", tags=["Admin UI"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _to_login(config: RouterConfig) -> RedirectResponse:
    response = RedirectResponse(config.login_path, status_code=303)
    clear_session_cookie(response, config)
    return response


# -------------------------------------------------------------------------
# 🔐 Login
# -------------------------------------------------------------------------
@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request):
    if session_user(request):
        return RedirectResponse("/admin/dashboard", status_code=303)
    return templates.TemplateResponse(request, "admin/login.html")


@router.post("/login")
def login_submit(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
    config: RouterConfig = Depends(get_router_config),
):
    user = authenticate(db, username, password) if username and password else None
    if not user:
        return templates.TemplateResponse(
            request,
            "admin/login.html",
            {"error": "Invalid credentials", "username": username},
            status_code=401,
        )

    response = RedirectResponse("/admin/dashboard", status_code=303)
    set_session_cookie(response, create_session_token(user.id, user.username), config)
    return response


@router.get("/logout")
def logout(config: RouterConfig = Depends(get_router_config)):
    return _to_login(config)


# -------------------------------------------------------------------------
# 🏠 Dashboard
# -------------------------------------------------------------------------
@router.get("", response_class=HTMLResponse)
@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    request: Request,
    db: Session = Depends(get_db),
    config: RouterConfig = Depends(get_router_config),
):
    admin = session_user(request)
    if not admin:
        return _to_login(config)

    tenants = db.query(Tenant).order_by(Tenant.created_at.desc()).all()
    return templates.TemplateResponse(
        request,
        "admin/dashboard.html",
        {
            "admin": admin,
            "tenants": tenants,
            "site_templates": list_site_templates(),
            "root_domain": config.primary_root,
        },
    )


# -------------------------------------------------------------------------
# 📩 Kontaktanfragen
# -------------------------------------------------------------------------
@router.get("/enquiries", response_class=HTMLResponse)
def enquiries(
    request: Request,
    tenantSlug: str = "",
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    config: RouterConfig = Depends(get_router_config),
):
    admin = session_user(request)
    if not admin:
        return _to_login(config)

    tenants = db.query(Tenant).order_by(Tenant.company_name).all()
    selected = next((t for t in tenants if t.slug == tenantSlug), None)
    if selected is None and tenants:
        selected = tenants[0]

    items = []
    if selected is not None:
        query = db.query(Enquiry).filter(Enquiry.tenant_id == selected.id)
        if status in ENQUIRY_STATUSES:
            query = query.filter(Enquiry.status == status)
        items = query.order_by(Enquiry.created_at.desc()).all()

    return templates.TemplateResponse(
        request,
        "admin/enquiries.html",
        {
            "admin": admin,
            "tenants": tenants,
            "selected": selected,
            "status": status or "",
            "statuses": ENQUIRY_STATUSES,
            "enquiries": items,
        },
    )
