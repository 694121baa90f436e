"""
Secure HTTP headers middleware.

Adds security-related headers to every response:
- X-Content-Type-Options
- X-Frame-Options
- Referrer-Policy
- Content-Security-Policy
- Cross-Origin-Resource-Policy
- Strict-Transport-Security (only when enabled)

Headers already set by a route are left alone.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": "default-src 'self'",
    "Cross-Origin-Resource-Policy": "same-origin",
}

HSTS_HEADER = "Strict-Transport-Security"
HSTS_VALUE = "max-age=15552000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds secure HTTP headers to every response.

    HSTS is opt-in so that plain-HTTP development hosts keep working.

    Args:
        app: The wrapped ASGI application.
        enable_hsts: Also send Strict-Transport-Security.
    """

    def __init__(self, app: ASGIApp, enable_hsts: bool = False) -> None:
        super().__init__(app)
        self.enable_hsts = enable_hsts

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for header_name, header_value in SECURE_HEADERS.items():
            response.headers.setdefault(header_name, header_value)
        if self.enable_hsts:
            response.headers.setdefault(HSTS_HEADER, HSTS_VALUE)
        return response
