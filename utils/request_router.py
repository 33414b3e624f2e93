from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from utils.app_config import RouterConfig
from utils.session_guard import guard_admin_request, is_admin_path
from utils.tenant import HostClassification, HostKind, classify_host


logger = logging.getLogger("sitebuilder.router")

# Paths the router never sees: API routes, framework assets and
# anything whose first segment looks like a file name.
_ROUTED_PATH_RE = re.compile(r"^/(?!api/|_next/|_static/|_vercel|[\w-]+\.\w+).*")


class RoutingOutcome(str, Enum):
    REWRITTEN = "rewritten"
    REDIRECTED = "redirected"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class RoutingDecision:
    outcome: RoutingOutcome
    classification: Optional[HostClassification]
    original_path: str
    target_path: str

    @property
    def rewritten(self) -> bool:
        return self.outcome is RoutingOutcome.REWRITTEN

    @property
    def redirected(self) -> bool:
        return self.outcome is RoutingOutcome.REDIRECTED

    def diagnostic(self) -> dict[str, Any]:
        classification = self.classification
        return {
            "host": classification.host if classification else None,
            "slug": classification.slug if classification else None,
            "classification": classification.kind.value if classification else None,
            "outcome": self.outcome.value,
            "original_path": self.original_path,
            "resulting_path": self.target_path,
        }


def path_is_routed(path: str, config: RouterConfig) -> bool:
    """True when the router runs for this path at all."""
    if is_admin_path(path, config):
        return True
    return bool(_ROUTED_PATH_RE.match(path or "/"))


def _with_query(path: str, query: str) -> str:
    return f"{path}?{query}" if query else path


def route_request(
    host: Optional[str],
    path: str,
    config: RouterConfig,
    cookie_value: Optional[str] = None,
    query: str = "",
) -> RoutingDecision:
    """
    Decide between rewrite, redirect and passthrough for one request.

    Checked in order, first match wins:
      1. tenant subdomain        -> rewrite to /sites/<slug><path>
      2. admin path w/o session  -> redirect to the login page
      3. anything else           -> passthrough
    """
    path = path or "/"
    original = _with_query(path, query)

    if not path_is_routed(path, config):
        return RoutingDecision(RoutingOutcome.PASSTHROUGH, None, original, original)

    classification = classify_host(host, config)

    if classification.kind is HostKind.TENANT_SUBDOMAIN:
        target = f"{config.sites_prefix}/{classification.slug}{path}"
        decision = RoutingDecision(
            RoutingOutcome.REWRITTEN,
            classification,
            original,
            _with_query(target, query),
        )
    else:
        guard = guard_admin_request(path, cookie_value, config)
        if guard.allowed:
            decision = RoutingDecision(
                RoutingOutcome.PASSTHROUGH, classification, original, original
            )
        else:
            decision = RoutingDecision(
                RoutingOutcome.REDIRECTED,
                classification,
                original,
                guard.login_path or config.login_path,
            )

    record = decision.diagnostic()
    logger.info(
        "route host=%s slug=%s class=%s outcome=%s %s -> %s",
        record["host"],
        record["slug"],
        record["classification"],
        record["outcome"],
        record["original_path"],
        record["resulting_path"],
        extra={"routing": record},
    )
    return decision
