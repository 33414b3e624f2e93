# =============================================================================
# 🏢 routes/tenants.py
# -----------------------------------------------------------------------------
# Admin-API für Tenant-Websites:
#   • Tenants anlegen / auflisten / löschen
#   • Bild-Upload, Logo-Analyse, SEO-Texte, Farbextraktion
#   • Verfügbare Website-Templates
# Alle Routen verlangen ein gültiges Session-Token (require_admin).
# =============================================================================

from __future__ import annotations

import json
import logging
import re
import shutil
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from auth_utils import require_admin
from database import get_db
from models import SEO, PageContent, Tenant
from utils import colors as color_tools
from utils import content_ai, image_host
from utils.app_config import UPLOADS_DIR
from utils.serializers import serialize_page, serialize_tenant, serialize_tenant_summary
from utils.site_templates import get_site_template, list_site_templates

logger = logging.getLogger("sitebuilder.tenants")

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)

SLUG_RE = re.compile(r"^[a-z0-9-]+$")
THEME_COLOR_KEYS = ("primary", "secondary", "accent", "text", "background")


class SlugIn(BaseModel):
    slug: str = ""


class GenerateSeoIn(BaseModel):
    company_name: str = Field("", alias="companyName")
    industry: Optional[str] = None
    colors: list[str] = Field(default_factory=list)
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class ExtractColorsIn(BaseModel):
    logo_url: str = Field("", alias="logoUrl")


def _parse_theme_colors(raw: str) -> Optional[dict[str, str]]:
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except ValueError as e:
        logger.warning("Failed to parse theme colors: %s", e)
        return None
    if not isinstance(value, dict):
        return None
    return {key: str(value[key]) for key in THEME_COLOR_KEYS if value.get(key)}


# -------------------------------------------------------------------------
# 📋 Tenants auflisten
# -------------------------------------------------------------------------
@router.get("/tenants")
def list_tenants(db: Session = Depends(get_db)) -> list[dict[str, Any]]:
    tenants = db.query(Tenant).order_by(Tenant.created_at.desc()).all()
    return [serialize_tenant_summary(t) for t in tenants]


# -------------------------------------------------------------------------
# ➕ Tenant anlegen
# -------------------------------------------------------------------------
@router.post("/tenants")
def create_tenant(
    slug: str = Form(""),
    company_name: str = Form("", alias="companyName"),
    template: str = Form(""),
    logo_url: str = Form("", alias="logoUrl"),
    favicon_url: str = Form("", alias="faviconUrl"),
    website_image_url: str = Form("", alias="websiteImageUrl"),
    industry: str = Form(""),
    seo_title: str = Form("", alias="seoTitle"),
    seo_description: str = Form("", alias="seoDescription"),
    seo_keywords: str = Form("", alias="seoKeywords"),
    contact_email: str = Form("", alias="contactEmail"),
    contact_phone: str = Form("", alias="contactPhone"),
    contact_address: str = Form("", alias="contactAddress"),
    theme_colors: str = Form("", alias="themeColors"),
    db: Session = Depends(get_db),
):
    slug = slug.strip()
    company_name = company_name.strip()

    if not slug or not company_name or not template or not logo_url:
        raise HTTPException(status_code=400, detail="Missing required fields")
    if not SLUG_RE.match(slug):
        raise HTTPException(
            status_code=400,
            detail="Invalid slug format. Use only lowercase letters, numbers, and hyphens.",
        )
    if get_site_template(template) is None:
        raise HTTPException(status_code=400, detail=f"Unknown template: {template}")
    if db.query(Tenant).filter(Tenant.slug == slug).first():
        raise HTTPException(status_code=400, detail="Tenant with this slug already exists")

    # 🖼️ data:-URLs zum Bild-Host hochladen
    try:
        uploaded_logo = image_host.upload_data_url(logo_url)
        uploaded_favicon = image_host.upload_data_url(favicon_url)
        uploaded_website_image = image_host.upload_data_url(website_image_url)
    except image_host.ImageUploadError as e:
        logger.error("Error uploading images for %s: %s", slug, e)
        raise HTTPException(status_code=500, detail=f"Failed to upload images: {e}") from e

    # 🤖 Inhalte generieren
    try:
        content = content_ai.generate_site_content(company_name, industry or None)
        services = content_ai.generate_services(company_name, industry or None)
    except content_ai.ContentServiceUnavailable as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    except Exception as e:
        logger.exception("Error creating content for %s: %s", slug, e)
        raise HTTPException(status_code=500, detail="Failed to create content") from e

    contact_info = None
    if contact_email or contact_phone or contact_address:
        contact_info = {
            "email": contact_email,
            "phone": contact_phone,
            "address": contact_address,
        }

    tenant = Tenant(
        slug=slug,
        company_name=company_name,
        template=template,
        logo_url=uploaded_logo,
        favicon=uploaded_favicon,
        industry=industry or None,
        settings={},
        theme_colors=_parse_theme_colors(theme_colors),
        contact_info=contact_info,
    )
    page = PageContent(
        home_title=content["homeTitle"],
        tagline=content["tagline"],
        about_us=content["aboutUs"],
        services=services,
        contact_blurb=content["contactBlurb"],
        website_image_url=uploaded_website_image,
        meta_description=seo_description or None,
        meta_keywords=seo_keywords or None,
    )
    tenant.pages.append(page)
    if seo_title or seo_description or seo_keywords:
        tenant.seo = SEO(
            title=seo_title or company_name,
            description=seo_description,
            keywords=seo_keywords,
            og_image=uploaded_website_image,
        )

    try:
        db.add(tenant)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception("Error creating tenant %s: %s", slug, e)
        raise HTTPException(status_code=500, detail="Failed to create tenant") from e

    db.refresh(tenant)
    logger.info("Tenant %s created (template=%s)", slug, template)
    return {"tenant": serialize_tenant(tenant), "pageContent": serialize_page(page)}


# -------------------------------------------------------------------------
# 🗑️ Tenant löschen
# -------------------------------------------------------------------------
@router.post("/tenants/delete")
def delete_tenant(payload: SlugIn, db: Session = Depends(get_db)):
    if not payload.slug:
        raise HTTPException(status_code=400, detail="Slug is required")

    tenant = db.query(Tenant).filter(Tenant.slug == payload.slug).first()
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant not found")

    slug = tenant.slug
    try:
        db.delete(tenant)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception("Error deleting tenant %s: %s", slug, e)
        raise HTTPException(status_code=500, detail="Failed to delete tenant") from e

    # Uploads sind optional, Fehler hier brechen nicht ab
    shutil.rmtree(UPLOADS_DIR / slug, ignore_errors=True)
    logger.info("Tenant %s deleted", slug)
    return {"success": True}


# -------------------------------------------------------------------------
# 🧩 Website-Templates
# -------------------------------------------------------------------------
@router.get("/templates")
def list_templates() -> list[dict[str, Any]]:
    return list_site_templates()


# -------------------------------------------------------------------------
# 📤 Bild-Upload
# -------------------------------------------------------------------------
@router.post("/image-upload")
def image_upload(image: Optional[UploadFile] = File(None)):
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="No image provided")
    try:
        return image_host.upload_image(image.file.read())
    except image_host.ImageUploadError as e:
        logger.error("Error uploading image: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to upload image: {e}") from e


# -------------------------------------------------------------------------
# 🔍 Logo-Analyse
# -------------------------------------------------------------------------
@router.post("/analyze-logo")
def analyze_logo(
    logo: Optional[UploadFile] = File(None),
    industry: str = Form("AC services"),
):
    if logo is None or not logo.filename:
        raise HTTPException(status_code=400, detail="No logo file provided")
    try:
        return content_ai.analyze_logo(
            logo.file.read(),
            logo.content_type or "image/png",
            industry=industry or "AC services",
        )
    except content_ai.ContentServiceUnavailable as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    except Exception as e:
        logger.exception("Error analyzing logo: %s", e)
        raise HTTPException(status_code=500, detail="Failed to analyze logo") from e


# -------------------------------------------------------------------------
# 📝 SEO-Texte
# -------------------------------------------------------------------------
@router.post("/generate-seo")
def generate_seo(payload: GenerateSeoIn):
    if not payload.company_name:
        raise HTTPException(status_code=400, detail="Company name is required")

    palette = list(payload.colors)
    if payload.logo_url and not palette:
        try:
            palette = color_tools.extract_palette_from_url(payload.logo_url)
        except color_tools.ColorExtractionError as e:
            # weiter ohne Farben
            logger.warning("Error extracting colors from logo: %s", e)

    try:
        seo = content_ai.generate_seo(payload.company_name, payload.industry, palette)
    except content_ai.ContentServiceUnavailable as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    except Exception as e:
        logger.exception("Error generating SEO content: %s", e)
        raise HTTPException(status_code=500, detail="Failed to generate SEO content") from e

    return {**seo, "extractedColors": palette, **color_tools.theme_from_palette(palette)}


# -------------------------------------------------------------------------
# 🎨 Farben aus Logo
# -------------------------------------------------------------------------
@router.post("/extract-colors")
def extract_colors(payload: ExtractColorsIn):
    if not payload.logo_url:
        raise HTTPException(status_code=400, detail="Logo URL is required")
    try:
        palette = color_tools.extract_palette_from_url(payload.logo_url)
    except color_tools.ColorExtractionError as e:
        logger.error("Error extracting colors: %s", e)
        raise HTTPException(status_code=500, detail="Failed to extract colors from logo") from e

    return {"success": True, "colors": palette, **color_tools.theme_from_palette(palette)}
