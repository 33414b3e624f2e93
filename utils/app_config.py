from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"
UPLOADS_DIR = STATIC_DIR / "uploads"


def _split_env_list(raw: str | None) -> tuple[str, ...]:
    items = []
    for part in str(raw or "").split(","):
        item = part.strip().lower().rstrip(".")
        if item:
            items.append(item)
    return tuple(items)


@dataclass(frozen=True)
class RouterConfig:
    """Static routing configuration, built once at process start."""

    root_domains: tuple[str, ...] = ("example.com",)
    preview_suffixes: tuple[str, ...] = (".vercel.app",)
    admin_prefix: str = "/admin"
    login_path: str = "/admin/login"
    sites_prefix: str = "/sites"
    session_cookie: str = "auth-token"

    @property
    def primary_root(self) -> str:
        return self.root_domains[0] if self.root_domains else ""


def load_router_config() -> RouterConfig:
    root_domains = _split_env_list(os.getenv("ROOT_DOMAIN", "example.com"))
    preview = _split_env_list(os.getenv("PREVIEW_DOMAINS", ".vercel.app"))
    return RouterConfig(
        root_domains=root_domains or ("example.com",),
        preview_suffixes=tuple(p if p.startswith(".") else f".{p}" for p in preview),
        session_cookie=os.getenv("SESSION_COOKIE_NAME", "auth-token"),
    )


def is_production() -> bool:
    return os.getenv("APP_ENV", "development").strip().lower() == "production"
