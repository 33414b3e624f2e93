from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from utils.app_config import RouterConfig


class GuardDecision(str, Enum):
    ALLOW = "allow"
    REDIRECT_TO_LOGIN = "redirect_to_login"


@dataclass(frozen=True)
class GuardOutcome:
    decision: GuardDecision
    login_path: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.decision is GuardDecision.ALLOW


def _is_under(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(f"{prefix}/")


def is_admin_path(path: str, config: RouterConfig) -> bool:
    return _is_under(path or "/", config.admin_prefix)


def is_login_path(path: str, config: RouterConfig) -> bool:
    return _is_under(path or "/", config.login_path)


def requires_session(path: str, config: RouterConfig) -> bool:
    """Admin paths need a session cookie, except the login page itself."""
    return is_admin_path(path, config) and not is_login_path(path, config)


def guard_admin_request(
    path: str, cookie_value: Optional[str], config: RouterConfig
) -> GuardOutcome:
    """
    Presence-only session check for admin paths.

    The token is not verified here; `auth_utils.require_admin` rejects forged
    or expired tokens on the endpoints that serve admin data.
    """
    if not requires_session(path, config):
        return GuardOutcome(GuardDecision.ALLOW)
    if cookie_value:
        return GuardOutcome(GuardDecision.ALLOW)
    return GuardOutcome(GuardDecision.REDIRECT_TO_LOGIN, login_path=config.login_path)
