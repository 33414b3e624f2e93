"""
📩 Kontaktanfragen (Enquiries)
────────────────────────────────────────────
Besucher einer Tenant-Website senden Anfragen, der Admin sichtet sie.

- POST  /api/enquiry           → neue Anfrage (öffentlich)
- GET   /api/contact-info      → letzte Kontaktdaten zu einer E-Mail (öffentlich)
- GET   /api/admin/enquiries   → Anfragen eines Tenants, optional nach Status
- PATCH /api/admin/enquiries   → Status ändern (new / read / responded)
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from auth_utils import require_admin
from database import get_db
from models import ENQUIRY_STATUSES, Enquiry, Tenant
from utils.serializers import serialize_enquiry

logger = logging.getLogger("sitebuilder.enquiries")

router = APIRouter(prefix="/api", tags=["Enquiries"])


class EnquiryIn(BaseModel):
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    message: str = ""
    tenant_slug: str = Field("", alias="tenantSlug")


class EnquiryStatusIn(BaseModel):
    enquiry_id: str = Field("", alias="enquiryId")
    status: str = ""


def _tenant_or_404(db: Session, slug: str) -> Tenant:
    tenant = db.query(Tenant).filter(Tenant.slug == slug).first()
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return tenant


# ─────────────────────────────────────────────
# 📬 Anfrage absenden
# ─────────────────────────────────────────────
@router.post("/enquiry")
def submit_enquiry(payload: EnquiryIn, db: Session = Depends(get_db)):
    if not payload.name or not payload.email or not payload.message or not payload.tenant_slug:
        raise HTTPException(status_code=400, detail="Missing required fields")

    tenant = _tenant_or_404(db, payload.tenant_slug)
    enquiry = Enquiry(
        tenant_id=tenant.id,
        name=payload.name,
        email=payload.email,
        phone=payload.phone or None,
        message=payload.message,
        status="new",
    )
    db.add(enquiry)
    db.commit()
    logger.info("📨 Neue Anfrage für %s von %s", tenant.slug, payload.email)

    return {
        "success": True,
        "message": "Enquiry submitted successfully",
        "enquiryId": enquiry.id,
    }


# ─────────────────────────────────────────────
# 👤 Kontaktdaten vorbefüllen
# ─────────────────────────────────────────────
@router.get("/contact-info")
def contact_info(email: str = "", db: Session = Depends(get_db)):
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")

    latest = (
        db.query(Enquiry)
        .filter(Enquiry.email == email)
        .order_by(Enquiry.created_at.desc())
        .first()
    )
    if not latest:
        return {"success": True, "data": None}
    return {
        "success": True,
        "data": {"name": latest.name, "email": latest.email, "phone": latest.phone},
    }


# ─────────────────────────────────────────────
# 🗂️ Admin: Anfragen sichten
# ─────────────────────────────────────────────
@router.get("/admin/enquiries", dependencies=[Depends(require_admin)])
def list_enquiries(
    tenantSlug: str = "",
    status: Optional[str] = None,
    db: Session = Depends(get_db),
):
    if not tenantSlug:
        raise HTTPException(status_code=400, detail="Tenant slug is required")

    tenant = _tenant_or_404(db, tenantSlug)
    query = db.query(Enquiry).filter(Enquiry.tenant_id == tenant.id)
    if status:
        query = query.filter(Enquiry.status == status)
    enquiries = query.order_by(Enquiry.created_at.desc()).all()

    return {"success": True, "enquiries": [serialize_enquiry(e) for e in enquiries]}


@router.patch("/admin/enquiries", dependencies=[Depends(require_admin)])
def update_enquiry_status(payload: EnquiryStatusIn, db: Session = Depends(get_db)):
    if not payload.enquiry_id or not payload.status:
        raise HTTPException(status_code=400, detail="Enquiry ID and status are required")
    if payload.status not in ENQUIRY_STATUSES:
        raise HTTPException(
            status_code=400,
            detail="Invalid status. Must be one of: new, read, responded",
        )

    enquiry = db.get(Enquiry, payload.enquiry_id)
    if not enquiry:
        raise HTTPException(status_code=404, detail="Enquiry not found")

    enquiry.status = payload.status
    db.commit()
    db.refresh(enquiry)
    return {"success": True, "enquiry": serialize_enquiry(enquiry)}
