# =============================================================================
# 🏢 models/tenant.py
# Ein Tenant = eine Kunden-Website, erreichbar über <slug>.<root-domain>
# =============================================================================

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, List, Optional

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database import Base

if TYPE_CHECKING:
    from models.enquiry import Enquiry
    from models.page_content import PageContent
    from models.seo import SEO


class Tenant(Base):
    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    # lowercase letters, digits and hyphens; checked when the tenant is created
    slug: Mapped[str] = mapped_column(String(63), unique=True, index=True)
    company_name: Mapped[str] = mapped_column(String(200))
    industry: Mapped[Optional[str]] = mapped_column(String(120))
    template: Mapped[str] = mapped_column(String(80))

    # =========================================================================
    # 🖼️ Branding
    # =========================================================================
    logo_url: Mapped[str] = mapped_column(String(500))
    favicon: Mapped[Optional[str]] = mapped_column(String(500))
    theme_colors: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    contact_info: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    settings: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # =========================================================================
    # 🔗 Beziehungen
    # =========================================================================
    pages: Mapped[List["PageContent"]] = relationship(
        "PageContent",
        back_populates="tenant",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PageContent.created_at",
    )
    seo: Mapped[Optional["SEO"]] = relationship(
        "SEO",
        back_populates="tenant",
        cascade="all, delete-orphan",
        uselist=False,
        lazy="selectin",
    )
    enquiries: Mapped[List["Enquiry"]] = relationship(
        "Enquiry",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )

    def color(self, key: str) -> Optional[str]:
        value = (self.theme_colors or {}).get(key)
        return str(value) if value else None

    def contact(self, key: str) -> str:
        return str((self.contact_info or {}).get(key) or "")

    def __repr__(self) -> str:
        return f"<Tenant(slug='{self.slug}', template='{self.template}')>"
