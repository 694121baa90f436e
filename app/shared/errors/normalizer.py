"""
Error normalizer.

Translates classified lower-level failures into AppErrors with a
client-facing message and status code. Anything that is not a
classified failure is returned unchanged. Inbound errors are never
mutated; a new AppError is built instead.
"""

from collections.abc import Callable

from app.shared.errors.app_error import AppError
from app.shared.errors.failures import (
    CastFailure,
    ClassifiedFailure,
    DuplicateKeyFailure,
    FailureKind,
    SchemaValidationFailure,
)

HTTP_400 = 400
HTTP_401 = 401


def _handle_cast(failure: CastFailure) -> AppError:
    return AppError(f"Invalid {failure.path}: {failure.value}", HTTP_400)


def _handle_duplicate_key(failure: DuplicateKeyFailure) -> AppError:
    if not failure.key_value:
        return AppError("Duplicate field value. Please use another value!", HTTP_400)
    value = next(iter(failure.key_value.values()))
    return AppError(
        f'Duplicate field value: "{value}". Please use another value!', HTTP_400
    )


def _handle_schema_validation(failure: SchemaValidationFailure) -> AppError:
    messages = ". ".join(failure.errors.values())
    return AppError(f"Invalid input data. {messages}", HTTP_400)


def _handle_malformed_token(_failure: ClassifiedFailure) -> AppError:
    return AppError("Invalid token. Please log in again.", HTTP_401)


def _handle_expired_token(_failure: ClassifiedFailure) -> AppError:
    return AppError("Your token has expired. Please log in again.", HTTP_401)


# Checked in this order. Add new failure sources here.
FAILURE_HANDLERS: dict[FailureKind, Callable[..., AppError]] = {
    FailureKind.CAST: _handle_cast,
    FailureKind.DUPLICATE_KEY: _handle_duplicate_key,
    FailureKind.SCHEMA_VALIDATION: _handle_schema_validation,
    FailureKind.MALFORMED_TOKEN: _handle_malformed_token,
    FailureKind.EXPIRED_TOKEN: _handle_expired_token,
}


def normalize_error(exc: BaseException) -> BaseException:
    """Map a classified failure to an AppError, or pass the error through.

    Args:
        exc: The raw error raised while handling a request.

    Returns:
        A new AppError when exc is a recognized failure, else exc itself.
    """
    if not isinstance(exc, ClassifiedFailure):
        return exc
    handler = FAILURE_HANDLERS.get(getattr(exc, "kind", None))
    if handler is None:
        return exc
    return handler(exc)
