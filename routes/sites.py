# =============================================================================
# 🌐 routes/sites.py
# -----------------------------------------------------------------------------
# Ziel der Subdomain-Umschreibung: <slug>.<root>/pfad → /sites/<slug>/pfad
#   • Unbekannter Slug        → 404 "Site not found"
#   • Unbekanntes Template    → 500 Fehlerseite
#   • Fehlender Seiteninhalt  → 500 Fehlerseite
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from database import get_db
from models import Tenant
from utils.app_config import TEMPLATES_DIR
from utils.serializers import serialize_tenant
from utils.site_templates import get_site_template, template_page

logger = logging.getLogger("sitebuilder.sites")

router = APIRouter(tags=["Sites"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

COLOR_FALLBACKS = {
    "primary": "#0f172a",
    "secondary": "#1e40af",
    "accent": "#3b82f6",
    "text": "#333333",
    "background": "#ffffff",
}


def _theme(tenant: Tenant, template_config: dict[str, Any]) -> dict[str, str]:
    defaults = {**COLOR_FALLBACKS, **(template_config.get("colors") or {})}
    return {key: tenant.color(key) or value for key, value in defaults.items()}


def _seo(tenant: Tenant, page: Any, services: list[dict[str, Any]]) -> dict[str, Any]:
    seo = tenant.seo
    keywords = (seo.keywords if seo else "") or page.meta_keywords
    if not keywords:
        keywords = ", ".join([tenant.company_name] + [s.get("title", "") for s in services])
    return {
        "title": (seo.title if seo else "") or tenant.company_name,
        "description": (seo.description if seo else "")
        or page.meta_description
        or f"{tenant.company_name} - {page.tagline}",
        "keywords": keywords,
        "og_image": (seo.og_image if seo else None) or page.website_image_url,
        "favicon": tenant.favicon or "/_static/favicon.ico",
    }


def _error_page(request: Request, title: str, message: str, status_code: int) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "sites/error.html",
        {"title": title, "message": message},
        status_code=status_code,
    )


# -------------------------------------------------------------------------
# 📦 Tenant-Daten (JSON)
# -------------------------------------------------------------------------
@router.get("/api/tenant/{slug}")
def tenant_data(slug: str, db: Session = Depends(get_db)):
    tenant = db.query(Tenant).filter(Tenant.slug == slug).first()
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return serialize_tenant(tenant)


# -------------------------------------------------------------------------
# 🏠 Tenant-Website
# -------------------------------------------------------------------------
@router.get("/sites/{slug}", response_class=HTMLResponse)
@router.get("/sites/{slug}/{page_path:path}", response_class=HTMLResponse)
def tenant_site(
    request: Request,
    slug: str,
    page_path: str = "",
    db: Session = Depends(get_db),
):
    tenant = db.query(Tenant).filter(Tenant.slug == slug).first()
    if not tenant or page_path.strip("/"):
        logger.info("Site not found: slug=%s path=/%s", slug, page_path)
        return templates.TemplateResponse(
            request,
            "sites/not_found.html",
            {"slug": slug},
            status_code=404,
        )

    template_config = get_site_template(tenant.template)
    if template_config is None:
        logger.error("Template not found for %s: %s", slug, tenant.template)
        return _error_page(request, "Template Error", f"Template not found: {tenant.template}", 500)

    if not tenant.pages:
        logger.error("Page content not found for tenant %s", tenant.id)
        return _error_page(request, "Content Error", "Page content not found for this site.", 500)

    page = tenant.pages[0]
    services = [s for s in (page.services or []) if isinstance(s, dict)]

    return templates.TemplateResponse(
        request,
        template_page(tenant.template),
        {
            "tenant": tenant,
            "page": page,
            "services": services,
            "colors": _theme(tenant, template_config),
            "seo": _seo(tenant, page, services),
            "contact": {
                "email": tenant.contact("email"),
                "phone": tenant.contact("phone"),
                "address": tenant.contact("address"),
            },
        },
    )
