"""
Page gatekeeper.

Only browser pages are redirected here. API routes answer 401 themselves
through the ``get_current_user`` dependency.
"""
from typing import Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse
from eventboard.core.config import settings
from eventboard.core.logging import request_logger
from eventboard.core.security import decode_token

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
PUBLIC_PREFIXES = ("/admin-secret", "/api/")


def _session_is_valid(request: Request, token: Optional[str]) -> bool:
    if not token:
        return False
    try:
        decode_token(token)
    except ValueError as e:
        request_logger(request).debug(f"Session cookie rejected by gate: {e}")
        return False
    return True


class SessionGateMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if path.startswith(PUBLIC_PREFIXES):
            return await call_next(request)

        token = request.cookies.get(settings.SESSION_COOKIE_NAME)

        if path == DASHBOARD_PATH or path.startswith(DASHBOARD_PATH + "/"):
            if not _session_is_valid(request, token):
                return RedirectResponse(url=LOGIN_PATH)
        elif path == LOGIN_PATH:
            if _session_is_valid(request, token):
                return RedirectResponse(url=DASHBOARD_PATH)
        elif path == "/":
            return RedirectResponse(url=LOGIN_PATH)

        return await call_next(request)
