"""
Centralized error handlers for FastAPI.

Every failure raised while serving a request funnels through one
pipeline: classify at the boundary, normalize, then format for the
configured deployment mode. Routes never build error bodies themselves.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.shared.errors.app_error import AppError
from app.shared.errors.failures import ClassifiedFailure, SchemaValidationFailure
from app.shared.errors.formatter import ErrorResponseFormatter
from app.shared.errors.normalizer import normalize_error

logger = logging.getLogger(__name__)

HTTP_404 = 404


def validation_failure_from(exc: RequestValidationError) -> SchemaValidationFailure:
    """Classify a request validation error as a schema validation failure."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        location = [
            str(part)
            for part in error.get("loc", ())
            if part not in {"body", "query", "path"}
        ]
        field = ".".join(location) or "_schema"
        message = error.get("msg", "Invalid value")
        if field in errors:
            errors[field] = f"{errors[field]}; {message}"
        else:
            errors[field] = message
    return SchemaValidationFailure(errors)


def app_error_from_http(request: Request, exc: StarletteHTTPException) -> AppError:
    """Classify a routing or transport HTTP exception as an AppError."""
    if exc.status_code == HTTP_404 and exc.detail == "Not Found":
        return AppError(f"Can't find {request.url.path} on this server!", HTTP_404)
    return AppError(str(exc.detail), exc.status_code)


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):
    """Render errors that no exception handler claimed.

    Must be the innermost middleware so the 500 it returns still gets the
    security headers. Nothing is re-raised to the server.
    """

    def __init__(self, app, formatter: ErrorResponseFormatter) -> None:
        super().__init__(app)
        self._formatter = formatter

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self._formatter.render(normalize_error(exc), raw=exc)


def register_error_handlers(app: FastAPI, formatter: ErrorResponseFormatter) -> None:
    """Register the error pipeline on the FastAPI application.

    Call this before adding any other middleware.

    Args:
        app: The FastAPI application instance.
        formatter: Formatter configured for the deployment mode.
    """

    def respond(raw: Exception, classified: Exception | None = None) -> JSONResponse:
        error = normalize_error(classified if classified is not None else raw)
        return formatter.render(error, raw=raw)

    @app.exception_handler(AppError)
    async def handle_app_error(_request: Request, exc: AppError) -> JSONResponse:
        """Render errors raised deliberately by application code."""
        logger.info("Operational error %d: %s", exc.status_code, exc.message)
        return respond(exc)

    @app.exception_handler(ClassifiedFailure)
    async def handle_classified_failure(
        _request: Request, exc: ClassifiedFailure
    ) -> JSONResponse:
        """Render failures classified by the data or token layer."""
        logger.info("Classified failure %s: %s", exc.kind.value, exc)
        return respond(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render request body, query, and path validation errors."""
        logger.info("Request validation failed: %d error(s)", len(exc.errors()))
        return respond(exc, validation_failure_from(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render routing errors such as 404 and 405."""
        logger.info("HTTP error %d on %s", exc.status_code, request.url.path)
        return respond(exc, app_error_from_http(request, exc))

    app.add_middleware(UnexpectedErrorMiddleware, formatter=formatter)
