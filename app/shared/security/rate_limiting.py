"""
Rate limiting configuration and setup.

Uses slowapi to enforce per-client limits on the tour endpoints. Each
application owns its limiter, built from the settings it was created
with. Exceeded limits raise an operational AppError rendered as a 429.
"""

from fastapi import Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import Settings
from app.shared.errors.app_error import AppError

HTTP_429 = 429
RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."
RATE_LIMIT_SCOPE = "api"


def build_limiter(app_settings: Settings) -> Limiter:
    """Create the per-application limiter, on or off as configured."""
    return Limiter(
        key_func=get_remote_address,
        enabled=app_settings.rate_limit_enabled,
    )


def enforce_rate_limit(request: Request) -> None:
    """Count the request against its client's budget.

    Reads the limiter and limit of the application serving the request.

    Raises:
        AppError: 429 when the client has used up its budget.
    """
    limiter: Limiter = request.app.state.limiter
    if not limiter.enabled:
        return
    item = parse(request.app.state.settings.rate_limit_default)
    if not limiter.limiter.hit(item, RATE_LIMIT_SCOPE, get_remote_address(request)):
        raise AppError(RATE_LIMIT_MESSAGE, HTTP_429)
