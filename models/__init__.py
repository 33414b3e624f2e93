# =============================================================================
# 📦 models/__init__.py
# -----------------------------------------------------------------------------
# Alle Modelle registrieren (Alembic + Base.metadata.create_all)
# =============================================================================

from .user import User
from .tenant import Tenant
from .page_content import PageContent
from .seo import SEO
from .enquiry import Enquiry, ENQUIRY_STATUSES

__all__ = [
    "User",
    "Tenant",
    "PageContent",
    "SEO",
    "Enquiry",
    "ENQUIRY_STATUSES",
]
