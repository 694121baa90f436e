"""
Classified lower-level failures.

Failures coming out of the data layer, request parsing, or token decoding
are classified once, where they are produced, into one of the variants
below. Each variant carries an explicit FailureKind tag so the error
normalizer matches on the tag instead of probing untyped shapes.
No framework imports allowed.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType


class FailureKind(Enum):
    """Tag identifying a classified failure.

    Declaration order is the order in which the normalizer checks them.
    """

    CAST = "cast"
    DUPLICATE_KEY = "duplicate_key"
    SCHEMA_VALIDATION = "schema_validation"
    MALFORMED_TOKEN = "malformed_token"
    EXPIRED_TOKEN = "expired_token"


class ClassifiedFailure(Exception):
    """Base class for every tagged lower-level failure."""

    kind: FailureKind

    def details(self) -> dict[str, object]:
        """Return the variant's fields for diagnostic output."""
        return {}


class CastFailure(ClassifiedFailure):
    """A value could not be converted to the type a field requires."""

    kind = FailureKind.CAST

    def __init__(self, path: str, value: object) -> None:
        super().__init__(f"Cast failed for value {value!r} at path {path!r}")
        self.path = path
        self.value = value

    def details(self) -> dict[str, object]:
        return {"path": self.path, "value": str(self.value)}


class DuplicateKeyFailure(ClassifiedFailure):
    """A write violated a uniqueness constraint.

    key_value maps each offending field to its value. It is empty when the
    store cannot tell which field collided.
    """

    kind = FailureKind.DUPLICATE_KEY

    def __init__(self, key_value: Mapping[str, object] | None = None) -> None:
        self.key_value = MappingProxyType(dict(key_value or {}))
        fields = ", ".join(self.key_value) or "unknown field"
        super().__init__(f"Duplicate key on {fields}")

    def details(self) -> dict[str, object]:
        return {"key_value": {k: str(v) for k, v in self.key_value.items()}}


class SchemaValidationFailure(ClassifiedFailure):
    """Input data failed schema validation.

    errors maps each invalid field to its message, in the order the
    validator reported them.
    """

    kind = FailureKind.SCHEMA_VALIDATION

    def __init__(self, errors: Mapping[str, str]) -> None:
        self.errors = MappingProxyType(dict(errors))
        super().__init__(f"Validation failed for {len(self.errors)} field(s)")

    def details(self) -> dict[str, object]:
        return {"errors": dict(self.errors)}


class MalformedTokenFailure(ClassifiedFailure):
    """An auth token could not be parsed or its signature did not verify."""

    kind = FailureKind.MALFORMED_TOKEN

    def __init__(self, reason: str = "invalid token") -> None:
        super().__init__(reason)
        self.reason = reason

    def details(self) -> dict[str, object]:
        return {"reason": self.reason}


class ExpiredTokenFailure(ClassifiedFailure):
    """An auth token was well formed but past its expiry."""

    kind = FailureKind.EXPIRED_TOKEN

    def __init__(self) -> None:
        super().__init__("token expired")
