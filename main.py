# =============================================================================
# 🚀 Site Builder – Hauptapplikation (main.py)
# =============================================================================

from __future__ import annotations
import logging
import os
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from dotenv import load_dotenv

from utils.app_config import STATIC_DIR, TEMPLATES_DIR, load_router_config
from utils.router_middleware import SubdomainRouterMiddleware

# -------------------------------------------------------------------------
# 1️⃣ .env laden (muss ganz oben sein!)
# -------------------------------------------------------------------------
env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=env_path)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
)
logger = logging.getLogger("sitebuilder")

# -------------------------------------------------------------------------
# 2️⃣ FastAPI App
# -------------------------------------------------------------------------
app = FastAPI(title="Site Builder", version="1.0")
app.state.router_config = load_router_config()
logger.info("🧩 Root-Domains: %s", ", ".join(app.state.router_config.root_domains))

# -------------------------------------------------------------------------
# 3️⃣ Templates & Static
# -------------------------------------------------------------------------
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
app.mount("/_static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# -------------------------------------------------------------------------
# 4️⃣ Subdomain-Router (Host-Klassifikation, Admin-Guard, Rewrite)
# -------------------------------------------------------------------------
app.add_middleware(SubdomainRouterMiddleware, config=app.state.router_config)

# -------------------------------------------------------------------------
# 5️⃣ Fehlerformat: {"error": "..."}
# -------------------------------------------------------------------------
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Invalid request body"}, status_code=400)

# -------------------------------------------------------------------------
# 6️⃣ Routen laden
# -------------------------------------------------------------------------
from routes import admin
from routes import auth
from routes import enquiries
from routes import sites
from routes import tenants

app.include_router(auth.router)
app.include_router(tenants.router)
app.include_router(enquiries.router)
app.include_router(sites.router)
app.include_router(admin.router)

# -------------------------------------------------------------------------
# 7️⃣ Home (Root-Domain)
# -------------------------------------------------------------------------
@app.get("/", response_class=HTMLResponse)
def home(request: Request):
    config = app.state.router_config
    return templates.TemplateResponse(
        request,
        "index.html",
        {"root_domain": config.primary_root},
    )

