"""
Bearer token decoding.

Verifies signed JWTs with PyJWT and classifies every decoding failure
into a tagged failure at this boundary, so callers never handle PyJWT
exceptions directly.
"""

import logging
from typing import Any

import jwt

from app.shared.errors.failures import ExpiredTokenFailure, MalformedTokenFailure

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an Authorization header, or None if absent."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    """Decode and verify a signed JWT.

    Args:
        token: The encoded token.
        secret: Shared signing secret.
        algorithm: The only algorithm accepted.

    Returns:
        The decoded claims.

    Raises:
        ExpiredTokenFailure: The token signature is valid but it has expired.
        MalformedTokenFailure: The token cannot be parsed or verified.
    """
    try:
        claims: dict[str, Any] = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError as exc:
        logger.info("Rejected expired token")
        raise ExpiredTokenFailure() from exc
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected invalid token: %s", type(exc).__name__)
        raise MalformedTokenFailure(str(exc)) from exc
    return claims
