from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from utils.app_config import TEMPLATES_DIR

logger = logging.getLogger("sitebuilder.templates")

SITE_TEMPLATES_DIR = TEMPLATES_DIR / "sites"
_TEMPLATE_ID_RE = re.compile(r"^[a-z0-9-]+$")


def _load_config(folder: Path) -> Optional[dict[str, Any]]:
    config_path = folder / "config.json"
    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error("Error loading template %s: %s", folder.name, e)
        return None
    config.setdefault("id", folder.name)
    return config


def list_site_templates(base_dir: Path = SITE_TEMPLATES_DIR) -> list[dict[str, Any]]:
    """Configs of all website templates, sorted by id. Broken ones are skipped."""
    if not base_dir.is_dir():
        return []
    templates = []
    for folder in sorted(p for p in base_dir.iterdir() if p.is_dir()):
        config = _load_config(folder)
        if config is not None:
            templates.append(config)
    return templates


def get_site_template(template_id: str, base_dir: Path = SITE_TEMPLATES_DIR) -> Optional[dict[str, Any]]:
    folder = base_dir / template_id
    if not _TEMPLATE_ID_RE.match(template_id or "") or not (folder / "index.html").is_file():
        return None
    return _load_config(folder)


def template_page(template_id: str) -> str:
    """Jinja name of the template's page, relative to TEMPLATES_DIR."""
    return f"sites/{template_id}/index.html"
