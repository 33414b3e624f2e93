from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from models import SEO, Enquiry, PageContent, Tenant


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_tenant_summary(tenant: Tenant) -> dict[str, Any]:
    return {
        "id": tenant.id,
        "slug": tenant.slug,
        "companyName": tenant.company_name,
        "template": tenant.template,
        "logoUrl": tenant.logo_url,
        "favicon": tenant.favicon,
        "createdAt": _iso(tenant.created_at),
        "contactInfo": tenant.contact_info,
    }


def serialize_page(page: PageContent) -> dict[str, Any]:
    return {
        "id": page.id,
        "tenantId": page.tenant_id,
        "homeTitle": page.home_title,
        "tagline": page.tagline,
        "aboutUs": page.about_us,
        "services": page.services or [],
        "contactBlurb": page.contact_blurb,
        "websiteImageUrl": page.website_image_url,
        "metaDescription": page.meta_description,
        "metaKeywords": page.meta_keywords,
    }


def serialize_seo(seo: Optional[SEO]) -> Optional[dict[str, Any]]:
    if seo is None:
        return None
    return {
        "title": seo.title,
        "description": seo.description,
        "keywords": seo.keywords,
        "ogImage": seo.og_image,
    }


def serialize_tenant(tenant: Tenant) -> dict[str, Any]:
    data = serialize_tenant_summary(tenant)
    data.update(
        {
            "industry": tenant.industry,
            "themeColors": tenant.theme_colors,
            "settings": tenant.settings or {},
            "updatedAt": _iso(tenant.updated_at),
            "pages": [serialize_page(p) for p in tenant.pages],
            "seo": serialize_seo(tenant.seo),
        }
    )
    return data


def serialize_enquiry(enquiry: Enquiry) -> dict[str, Any]:
    return {
        "id": enquiry.id,
        "tenantId": enquiry.tenant_id,
        "name": enquiry.name,
        "email": enquiry.email,
        "phone": enquiry.phone,
        "message": enquiry.message,
        "status": enquiry.status,
        "createdAt": _iso(enquiry.created_at),
        "updatedAt": _iso(enquiry.updated_at),
    }
