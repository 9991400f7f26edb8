"""
Route guard.

Decides for every page request whether to pass it through, send the visitor
to the login page, or send them to the dashboard.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import status
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app import database
from app.config import SESSION_COOKIE
from app.session import SessionContext, resolve_user, role_lookup_for
from app.supabase_client import supabase_for_app

logger = logging.getLogger(__name__)

PROTECTED_PREFIXES = ("/dashboard", "/admin", "/profile")
ADMIN_PREFIX = "/admin"
AUTH_PAGES = ("/login", "/signup")
LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"

SKIP_PREFIXES = ("/static/",)
SKIP_PATHS = {"/favicon.ico"}


def is_under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


@dataclass(frozen=True)
class GuardDecision:
    redirect_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None


PASS = GuardDecision()


def evaluate_route(path: str, session: SessionContext) -> GuardDecision:
    # order matters: an anonymous /admin request never reaches the role check
    if not session.authenticated:
        if any(is_under(path, p) for p in PROTECTED_PREFIXES):
            return GuardDecision(LOGIN_PATH)
        return PASS

    if path in AUTH_PAGES:
        return GuardDecision(DASHBOARD_PATH)

    if is_under(path, ADMIN_PREFIX) and session.role != "admin":
        return GuardDecision(DASHBOARD_PATH)

    return PASS


def should_skip(path: str) -> bool:
    return path in SKIP_PATHS or path.startswith(SKIP_PREFIXES)


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Resolves the session once and applies `evaluate_route`."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if should_skip(path):
            return await call_next(request)

        token = request.cookies.get(SESSION_COOKIE)
        user = await run_in_threadpool(resolve_user, lambda: supabase_for_app(request.app), token)
        session = SessionContext(user, role_lookup_for(database.SessionLocal), token=token if user else None)
        request.state.session = session

        decision = await run_in_threadpool(evaluate_route, path, session)
        if not decision.allowed:
            logger.debug("Guard redirect %s -> %s", path, decision.redirect_to)
            return RedirectResponse(url=decision.redirect_to, status_code=status.HTTP_303_SEE_OTHER)
        return await call_next(request)
