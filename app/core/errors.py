"""Error types raised by the students API.

ApiError is a classified failure: it carries the HTTP status the caller sees
and a message that is safe to return. Anything that is not an ApiError is an
unclassified fault and becomes a generic 500 at the handler boundary.
"""


class ApiError(Exception):
    """Classified error carrying an HTTP status and a caller-facing message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    def to_response(self) -> dict:
        return {"success": False, "message": self.message}


class RequestValidationFailed(Exception):
    """Raised when a request does not satisfy its endpoint schema."""

    def __init__(self, errors: list[dict]):
        super().__init__("Validation error")
        self.errors = errors

    def to_response(self) -> dict:
        return {"error": "Validation error", "detail": self.errors}
