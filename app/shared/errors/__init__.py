"""
Shared error handling package.

Centralizes error classification, normalization, and response
formatting so that every failure produces the same response shape.
"""

from app.shared.errors.app_error import AppError, status_for_code
from app.shared.errors.failures import (
    CastFailure,
    ClassifiedFailure,
    DuplicateKeyFailure,
    ExpiredTokenFailure,
    FailureKind,
    MalformedTokenFailure,
    SchemaValidationFailure,
)
from app.shared.errors.formatter import DeploymentMode, ErrorResponseFormatter
from app.shared.errors.normalizer import normalize_error

__all__ = [
    "AppError",
    "CastFailure",
    "ClassifiedFailure",
    "DeploymentMode",
    "DuplicateKeyFailure",
    "ErrorResponseFormatter",
    "ExpiredTokenFailure",
    "FailureKind",
    "MalformedTokenFailure",
    "SchemaValidationFailure",
    "normalize_error",
    "status_for_code",
]
