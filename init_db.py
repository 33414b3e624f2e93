# =============================================================================
# 🧩 init_db.py
# -----------------------------------------------------------------------------
# Initialisiert die Datenbank für den Site Builder:
#   - Erstellt alle Tabellen
#   - Legt den Admin-Benutzer an (ADMIN_USERNAME / ADMIN_PASSWORD)
#   - Optional: Demo-Tenant "demo" mit dem Template "professional"
# Für Produktivsysteme: `alembic upgrade head`
# =============================================================================

import os

from sqlalchemy.orm import Session

from auth_utils import hash_password
from database import Base, SessionLocal, engine
from models import PageContent, SEO, Tenant, User
from utils.content_ai import FALLBACK_TAGLINE_SERVICES


def seed_admin(db: Session, username: str, password: str) -> User:
    """Admin anlegen, falls noch nicht vorhanden."""
    user = db.query(User).filter(User.username == username).first()
    if user:
        print(f"  ✔️ Admin '{username}' existiert bereits.")
        return user

    user = User(username=username, password_hash=hash_password(password))
    db.add(user)
    db.commit()
    print(f"  🆕 Admin erstellt: {username}")
    return user


def seed_demo_tenant(db: Session, slug: str = "demo") -> Tenant:
    tenant = db.query(Tenant).filter(Tenant.slug == slug).first()
    if tenant:
        print(f"  ✔️ Tenant '{slug}' existiert bereits.")
        return tenant

    tenant = Tenant(
        slug=slug,
        company_name="Demo Cooling Co.",
        industry="AC services",
        template="professional",
        logo_url="https://placehold.co/96x96/png",
        theme_colors={"primary": "#0f172a", "secondary": "#1e40af", "accent": "#3b82f6"},
        contact_info={
            "email": "hello@demo-cooling.test",
            "phone": "+1 555 0100",
            "address": "1 Main Street",
        },
        settings={},
    )
    tenant.pages.append(
        PageContent(
            home_title="Stay Cool All Year Round",
            tagline="Fast, friendly air conditioning service",
            about_us="Demo Cooling Co. installs and services air conditioning for homes and offices.",
            services=[dict(s) for s in FALLBACK_TAGLINE_SERVICES["services"]],
            contact_blurb="Tell us what you need and we will get back to you within one business day.",
        )
    )
    tenant.seo = SEO(
        title="Demo Cooling Co. | AC Installation & Repair",
        description="Air conditioning installation, repair and maintenance.",
        keywords="air conditioning, ac repair, hvac",
    )
    db.add(tenant)
    db.commit()
    print(f"  🆕 Demo-Tenant erstellt: {slug}")
    return tenant


def main() -> None:
    # 🔹 Schritt 1 – Tabellen anlegen
    print("🛠️ Erstelle Tabellen in der Datenbank...")
    Base.metadata.create_all(bind=engine)
    print("✅ Tabellen wurden erfolgreich erstellt.\n")

    # 🔹 Schritt 2 – Standard-Daten einfügen
    db = SessionLocal()
    try:
        print("👤 Prüfe auf Admin-Benutzer...")
        seed_admin(
            db,
            os.getenv("ADMIN_USERNAME", "admin"),
            os.getenv("ADMIN_PASSWORD", "admin"),
        )
        if os.getenv("SEED_DEMO_TENANT", "1").lower() in {"1", "true", "yes"}:
            print("🏢 Prüfe auf Demo-Tenant...")
            seed_demo_tenant(db)
    finally:
        db.close()

    print("\n🎉 Datenbankinitialisierung abgeschlossen!")


if __name__ == "__main__":
    main()
