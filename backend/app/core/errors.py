"""Error Taxonomy — closed set of error kinds shared by every layer of the API.

Invariants:
    - Every ErrorKind maps to exactly one HTTP status (_HTTP_STATUS is exhaustive)
    - ApiError is the only exception type that carries a user-facing message
    - to_response() produces the failure envelope {success: false, error: {code, message}}
    - No storage internals in user-facing messages

Design Decisions:
    - One ApiError class tagged with an ErrorKind instead of a subclass per kind:
      the terminal handler checks a closed enum, not an open class hierarchy
    - Rate-limit rejections are NOT an ErrorKind: they keep their own
      {statusCode, message} shape (see api/pipeline.py)
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Error kinds visible on the wire as error.code."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.PAYLOAD_TOO_LARGE: 413,
    ErrorKind.INTERNAL_ERROR: 500,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
}

_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION_ERROR: "Validation failed",
    ErrorKind.UNAUTHORIZED: "Unauthorized",
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.CONFLICT: "Resource already exists",
    ErrorKind.PAYLOAD_TOO_LARGE: "Request body is too large",
    ErrorKind.INTERNAL_ERROR: "Internal Server Error",
    ErrorKind.SERVICE_UNAVAILABLE: "Service unavailable",
}


class ApiError(Exception):
    """Classified failure that the terminal error handler renders as-is."""

    def __init__(self, kind: ErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or kind.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    def to_response(self) -> dict:
        """Convert to the standard failure envelope."""
        return {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
            },
        }

    def __repr__(self) -> str:
        return f"ApiError({self.kind.value}, {self.message!r})"


def kind_for_status(http_status: int) -> ErrorKind:
    """Closest ErrorKind for a framework-raised HTTP status."""
    if http_status in (404, 405):
        return ErrorKind.NOT_FOUND
    for kind, mapped in _HTTP_STATUS.items():
        if mapped == http_status:
            return kind
    return ErrorKind.INTERNAL_ERROR
