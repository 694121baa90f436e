"""
Application error type.

An AppError is an expected, handled condition that is safe to describe
to the caller. It is the only error shape the response formatter treats
as operational. No framework imports allowed.
"""

CLIENT_ERROR_MIN = 400
SERVER_ERROR_MIN = 500


def status_for_code(status_code: int) -> str:
    """Classify an HTTP status code as "fail" (4xx) or "error" (anything else)."""
    if CLIENT_ERROR_MIN <= status_code < SERVER_ERROR_MIN:
        return "fail"
    return "error"


class AppError(Exception):
    """Operational error carrying a message and an HTTP status code.

    Attributes are read-only once the error is constructed.

    Attributes:
        message: Human-readable description, exposed to clients.
        status_code: HTTP status code of the response.
        status: "fail" for client errors, "error" otherwise.
        is_operational: Always True for this type.
    """

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self._message = message
        self._status_code = status_code
        self._status = status_for_code(status_code)

    @property
    def message(self) -> str:
        return self._message

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def status(self) -> str:
        return self._status

    @property
    def is_operational(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._message!r}, {self._status_code})"

    def to_dict(self) -> dict[str, object]:
        """Return the public fields of the error as a JSON-ready dict."""
        return {
            "name": type(self).__name__,
            "message": self._message,
            "status_code": self._status_code,
            "status": self._status,
            "is_operational": True,
        }
