"""
Custom exception hierarchy for the AI‑services client library.

All public exceptions inherit from :class:`AIServicesError`, allowing callers
to catch a single base class for any client‑related failure while still being
able to differentiate specific error conditions when needed.

The hierarchy is split in three groups:

* validation errors raised before any I/O happens
  (:class:`MissingRequiredParameter`, :class:`InvalidFieldType`),
* codec errors (:class:`EncodingError`, :class:`DecodingError`),
* errors reported after a request was sent (:class:`ServiceError` and its
  status‑specific subclasses, :class:`TransportError`).
"""

from typing import Any, Dict, List, Optional, Type


class AIServicesError(Exception):
    """Base exception for all library‑specific errors."""

    pass


class MissingRequiredParameter(AIServicesError):
    """Raised when a required option (path, query, header or body field) is absent."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Missing required parameter: {field_name!r}")


class InvalidFieldType(AIServicesError):
    """Raised when a value does not match the declared kind of its field."""

    def __init__(self, field_name: str, expected_kind: str, value: Any = None):
        self.field_name = field_name
        self.expected_kind = expected_kind
        self.value = value
        super().__init__(
            f"Invalid value for {field_name!r}: expected {expected_kind}, "
            f"got {type(value).__name__}"
        )


class EncodingError(AIServicesError):
    """Raised when a typed value cannot be represented as JSON."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class DecodingError(AIServicesError):
    """
    Raised when a successful response cannot be parsed into the expected schema.

    The raw body is retained so callers can inspect what the service sent.
    """

    def __init__(self, reason: str, raw_body: Optional[bytes] = None):
        self.reason = reason
        self.raw_body = raw_body
        super().__init__(reason)


class TransportError(AIServicesError):
    """Raised when the request could not be delivered (DNS, TLS, connection reset…)."""

    pass


class ServiceError(AIServicesError):
    """
    A well‑formed (or at least non‑successful) error response from the service.

    Attributes
    ----------
    status_code : int
        HTTP status code returned by the service.
    code : Optional[int]
        Error code carried in the body, when the body could be decoded.
    message : Optional[str]
        Human readable message from the body, when present.
    raw_body : bytes
        The untouched response body.
    errors : Optional[List[Dict[str, Any]]]
        Additional error entries reported by some services.
    """

    def __init__(
        self,
        status_code: int,
        code: Optional[int] = None,
        message: Optional[str] = None,
        raw_body: bytes = b"",
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.raw_body = raw_body
        self.errors = errors
        text = message if message is not None else _short_body(raw_body)
        super().__init__(f"HTTP {status_code}: {text}")


class BadRequestError(ServiceError):
    """HTTP 400 – malformed request payload."""


class AuthenticationError(ServiceError):
    """HTTP 401 – invalid or missing credentials."""


class ForbiddenError(ServiceError):
    """HTTP 403 – credentials are valid but not allowed to do this."""


class NotFoundError(ServiceError):
    """HTTP 404 – the addressed resource does not exist."""


class ConflictError(ServiceError):
    """HTTP 409 – the resource is in a conflicting state."""


class RequestTooLargeError(ServiceError):
    """HTTP 413 – the request body exceeds the service limit."""


class UnsupportedMediaTypeError(ServiceError):
    """HTTP 415 – the service does not accept the sent content type."""


class RateLimitError(ServiceError):
    """HTTP 429 – request rate limit exceeded."""


class InternalServerError(ServiceError):
    """HTTP 500 – the service failed while handling the request."""


class ServiceUnavailableError(ServiceError):
    """HTTP 503 – the service is temporarily unavailable."""


STATUS_TO_ERROR: Dict[int, Type[ServiceError]] = {
    400: BadRequestError,
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    413: RequestTooLargeError,
    415: UnsupportedMediaTypeError,
    429: RateLimitError,
    500: InternalServerError,
    503: ServiceUnavailableError,
}


def error_class_for_status(status_code: int) -> Type[ServiceError]:
    return STATUS_TO_ERROR.get(status_code, ServiceError)


def _short_body(raw_body: bytes, limit: int = 200) -> str:
    if not raw_body:
        return "<empty body>"
    text = raw_body.decode("utf-8", errors="replace")
    return text if len(text) <= limit else text[:limit] + "..."
