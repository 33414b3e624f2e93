from __future__ import annotations

from starlette.requests import Request
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from utils.app_config import RouterConfig
from utils.request_router import RoutingOutcome, route_request


class SubdomainRouterMiddleware:
    """
    Runs once per HTTP request before any route handler.

    Tenant subdomains are rewritten internally to /sites/<slug><path>,
    anonymous admin requests are redirected to the login page, everything
    else passes through untouched.
    """

    def __init__(self, app: ASGIApp, config: RouterConfig) -> None:
        self.app = app
        self.config = config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        decision = route_request(
            host=request.headers.get("host"),
            path=scope.get("path", "/"),
            config=self.config,
            cookie_value=request.cookies.get(self.config.session_cookie),
            query=scope.get("query_string", b"").decode("latin-1"),
        )

        if decision.outcome is RoutingOutcome.REDIRECTED:
            login_url = request.url.replace(path=decision.target_path, query="", fragment="")
            response = RedirectResponse(str(login_url), status_code=307)
            await response(scope, receive, send)
            return

        if decision.outcome is RoutingOutcome.REWRITTEN:
            new_path = decision.target_path.split("?", 1)[0]
            scope = dict(scope)
            scope["path"] = new_path
            scope["raw_path"] = new_path.encode("utf-8")
            scope.setdefault("state", {})["tenant_slug"] = decision.classification.slug

        await self.app(scope, receive, send)
