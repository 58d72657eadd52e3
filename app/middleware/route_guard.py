"""Redirect unauthenticated visitors of protected page routes to the login page."""

import logging
from collections.abc import Callable, Iterable
from urllib.parse import urlencode

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from app.core.security import verify_session_token

logger = logging.getLogger(__name__)


def is_protected_path(path: str, prefixes: Iterable[str]) -> bool:
    """True when path is a protected prefix or lies beneath one ('/dashboard', '/dashboard/map')."""
    for prefix in prefixes:
        if prefix == "/" or path == prefix or path.startswith(prefix + "/"):
            return True
    return False


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """
    Stateless per-request session check for page routes.

    Requests under a protected prefix need a session cookie whose token
    verifies; otherwise the visitor is redirected to login_path with the
    requested path in the 'from' query parameter. Everything else passes
    through untouched.
    """

    def __init__(
        self,
        app: ASGIApp,
        protected_prefixes: Iterable[str],
        cookie_name: str,
        login_path: str = "/login",
    ) -> None:
        super().__init__(app)
        self.protected_prefixes = tuple(protected_prefixes)
        self.cookie_name = cookie_name
        self.login_path = login_path

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if not is_protected_path(path, self.protected_prefixes):
            return await call_next(request)

        if verify_session_token(request.cookies.get(self.cookie_name)) is None:
            logger.debug("Redirecting unauthenticated request for %s", path)
            target = f"{self.login_path}?{urlencode({'from': path})}"
            return RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
        return await call_next(request)
