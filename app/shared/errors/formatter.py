"""
Error response formatter.

Renders an error as the JSON body returned to the client. The output
depends on the deployment mode, which is injected at construction:

- development: diagnostic body with the raw error and its stack trace.
- production: user-safe body. Operational errors expose status and
  message only; anything else is logged and replaced by a generic 500.
"""

import logging
import traceback
from enum import Enum

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.shared.errors.app_error import status_for_code
from app.shared.errors.failures import ClassifiedFailure

logger = logging.getLogger(__name__)

HTTP_500 = 500
GENERIC_MESSAGE = "Something went wrong."

_SCALAR_TYPES = (str, int, float, bool, type(None))


class DeploymentMode(str, Enum):
    """How much detail error responses reveal."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, value: str | None) -> "DeploymentMode":
        """Resolve a configured environment name to a mode.

        Unrecognized values fall back to PRODUCTION so that an unexpected
        setting never leaks diagnostics or leaves a request unanswered.
        """
        normalized = (value or "").strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        logger.warning(
            "Unknown deployment mode %r, falling back to %s",
            value,
            cls.PRODUCTION.value,
        )
        return cls.PRODUCTION


def resolve_status(error: BaseException) -> tuple[int, str]:
    """Return (status_code, status) for any error, defaulting to 500/"error"."""
    status_code = getattr(error, "status_code", None)
    if not isinstance(status_code, int) or not 100 <= status_code <= 599:
        status_code = HTTP_500
    status = getattr(error, "status", None)
    if not isinstance(status, str) or not status:
        status = status_for_code(status_code)
    return status_code, status


def is_operational(error: BaseException) -> bool:
    """True only for errors that explicitly declare themselves operational."""
    return getattr(error, "is_operational", False) is True


def message_of(error: BaseException) -> str:
    """Return the human-readable message of an error."""
    message = getattr(error, "message", None)
    return message if isinstance(message, str) and message else str(error)


def describe_error(error: BaseException) -> dict[str, object]:
    """Build a JSON-ready description of an arbitrary error."""
    to_dict = getattr(error, "to_dict", None)
    if callable(to_dict):
        return jsonable_encoder(to_dict())

    description: dict[str, object] = {
        "name": type(error).__name__,
        "message": str(error),
    }
    if isinstance(error, ClassifiedFailure):
        description["kind"] = error.kind.value
        description.update(error.details())
        return jsonable_encoder(description)

    for key, value in vars(error).items():
        if key.startswith("_") or key in description:
            continue
        if isinstance(value, _SCALAR_TYPES):
            description[key] = value
        else:
            description[key] = repr(value)
    return description


def format_stack(error: BaseException) -> str | None:
    """Return the formatted traceback of error, or None if it was never raised."""
    if error.__traceback__ is None:
        return None
    return "".join(
        traceback.format_exception(type(error), error, error.__traceback__)
    )


class ErrorResponseFormatter:
    """Turns normalized errors into JSON responses for one deployment mode.

    Args:
        mode: Deployment mode selecting diagnostic or user-safe output.
    """

    def __init__(self, mode: DeploymentMode) -> None:
        self._mode = mode

    @property
    def mode(self) -> DeploymentMode:
        return self._mode

    def build(
        self, error: BaseException, raw: BaseException | None = None
    ) -> tuple[int, dict[str, object]]:
        """Compute the status code and body for an error.

        Args:
            error: The error after normalization.
            raw: The error as originally raised. Defaults to error.

        Returns:
            A (status_code, body) pair.
        """
        raw = raw if raw is not None else error
        status_code, status = resolve_status(error)
        operational = is_operational(error)

        if not operational:
            logger.error(
                "Unexpected error: %s",
                type(raw).__name__,
                exc_info=(type(raw), raw, raw.__traceback__),
            )

        if self._mode is DeploymentMode.DEVELOPMENT:
            body: dict[str, object] = {
                "status": status,
                "message": message_of(error),
                "error": describe_error(raw),
            }
            stack = format_stack(raw)
            if stack is not None:
                body["stack"] = stack
            return status_code, body

        if operational:
            return status_code, {"status": status, "message": message_of(error)}

        return HTTP_500, {"status": "error", "message": GENERIC_MESSAGE}

    def render(
        self, error: BaseException, raw: BaseException | None = None
    ) -> JSONResponse:
        """Build the JSON response for an error."""
        status_code, body = self.build(error, raw)
        return JSONResponse(status_code=status_code, content=body)
