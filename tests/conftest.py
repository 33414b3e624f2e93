import os
import sys

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# ⚙️ vor dem Import von main setzen (RouterConfig wird beim Start gebaut)
os.environ.setdefault("ROOT_DOMAIN", "example.com")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

from auth_utils import create_session_token, hash_password  # noqa: E402
from database import Base, get_db  # noqa: E402
from main import app  # noqa: E402
from models import SEO, PageContent, Tenant, User  # noqa: E402

ADMIN_PASSWORD = "s3cret-pass"


# ─────────────────────────────────────────────
# 🗄️ In-Memory-Datenbank
# ─────────────────────────────────────────────
@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def override_db(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.pop(get_db, None)


# ─────────────────────────────────────────────
# 🌐 Clients
# ─────────────────────────────────────────────
@pytest.fixture
def client(override_db):
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def async_client(override_db):
    """Erstellt einen funktionierenden Testclient."""
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def cookie_name():
    return app.state.router_config.session_cookie


# ─────────────────────────────────────────────
# 👤 Admin
# ─────────────────────────────────────────────
@pytest.fixture
def admin_user(db):
    user = User(username="admin", password_hash=hash_password(ADMIN_PASSWORD))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD


@pytest.fixture
def admin_token(admin_user):
    return create_session_token(admin_user.id, admin_user.username)


@pytest.fixture
def admin_client(client, admin_token, cookie_name):
    client.cookies.set(cookie_name, admin_token)
    return client


# ─────────────────────────────────────────────
# 🏢 Tenants
# ─────────────────────────────────────────────
@pytest.fixture
def make_tenant(db):
    def _make(slug="acme", template="professional", with_page=True, **fields):
        tenant = Tenant(
            slug=slug,
            company_name=fields.pop("company_name", "Acme Cooling"),
            template=template,
            logo_url=fields.pop("logo_url", "https://img.test/logo.png"),
            industry=fields.pop("industry", "AC services"),
            settings={},
            **fields,
        )
        if with_page:
            tenant.pages.append(
                PageContent(
                    home_title="Cool Homes, Happy People",
                    tagline="Fast AC repair",
                    about_us="Family business since 1999.",
                    services=[
                        {"title": "AC Repair", "description": "Same-day repairs."},
                        {"title": "Installation", "description": "New units fitted."},
                    ],
                    contact_blurb="Call us any time.",
                )
            )
        db.add(tenant)
        db.commit()
        db.refresh(tenant)
        return tenant

    return _make


@pytest.fixture
def tenant(make_tenant):
    return make_tenant(
        contact_info={"email": "info@acme.test", "phone": "+1 555 0101", "address": ""},
        theme_colors={"primary": "#112233"},
        seo=SEO(title="Acme Cooling | AC Repair", description="Best AC in town", keywords="ac, repair"),
    )
