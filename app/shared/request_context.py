"""
Request context middleware.

- RequestTimeMiddleware stamps every request with its arrival time.
- AccessLogMiddleware logs one line per request. It is only installed
  in development.
"""

import logging
import time
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


class RequestTimeMiddleware(BaseHTTPMiddleware):
    """Store the request arrival time (ISO 8601, UTC) on request.state."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.request_time = datetime.now(timezone.utc).isoformat()
        return await call_next(request)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    def __init__(self, app: ASGIApp, logger_name: str = "app.access") -> None:
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, start)
            raise
        self._log(request, response.status_code, start)
        return response

    def _log(self, request: Request, status_code: int, start: float) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        self.logger.info(
            "%s %s %d %.2f ms",
            request.method,
            request.url.path,
            status_code,
            duration_ms,
        )
