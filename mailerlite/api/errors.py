# mailerlite/api/errors.py

from typing import Any, Optional, TYPE_CHECKING
from enum import Enum

from ..core.exceptions import MailerLiteError

if TYPE_CHECKING:
    from .response_handler import Response

class APIError(MailerLiteError):
    """Base exception for API-related errors"""
    pass

class RequestError(APIError):
    """Raised when an outbound request cannot be built"""
    pass

class OptionsEncodeError(APIError):
    """Raised when read options cannot be encoded into a URL"""
    pass

class TransportError(APIError):
    """Raised when the transport fails or returns no response"""
    pass

class RequestCancelledError(APIError):
    """Raised when the request context was cancelled"""
    pass

class DeadlineExceededError(RequestCancelledError):
    """Raised when the request context deadline passed"""
    pass

class ResponseError(APIError):
    """Raised when decoding a successful response body fails"""
    pass

class PageTokenError(APIError):
    """Raised when a pagination link cannot be parsed"""
    pass

class ErrorKind(Enum):
    """Discriminant for API error responses"""
    GENERIC = "generic"
    AUTH = "auth"

class ErrorResponse(APIError):
    """
    Error returned by the API for a non-success status.

    Carries the response envelope that caused it, the ``message`` and the
    free-form ``errors`` payload from the body. ``kind`` tells generic
    failures apart from authentication failures.
    """

    kind = ErrorKind.GENERIC

    def __init__(
        self,
        response: "Response",
        message: str = "",
        errors: Any = None
    ):
        super().__init__(message, details={"errors": errors} if errors is not None else None)
        self.response = response
        self.errors = errors

    @property
    def status(self) -> int:
        return self.response.status

    def __str__(self) -> str:
        return f"{self.response.method} {self.response.url}: {self.response.status} {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

class AuthenticationError(ErrorResponse):
    """Raised when API authentication fails (HTTP 401)"""

    kind = ErrorKind.AUTH

def error_for_status(
    response: "Response",
    message: str = "",
    errors: Optional[Any] = None
) -> ErrorResponse:
    """Select the error variant for a failed response"""
    if response.status == 401:
        return AuthenticationError(response, message, errors)
    return ErrorResponse(response, message, errors)
