# mailerlite/api/response_handler.py

from typing import Dict, Any, Optional, Callable
from dataclasses import dataclass, field
from datetime import datetime, UTC
import logging
import json

from .errors import ErrorResponse, ResponseError, error_for_status
from .transport import RawResponse

logger = logging.getLogger(__name__)

@dataclass
class Response:
    """Envelope around a raw transport response"""
    raw: RawResponse
    data: Any = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    duration: float = 0.0

    @property
    def status(self) -> int:
        return self.raw.status

    @property
    def headers(self) -> Dict[str, str]:
        return self.raw.headers

    @property
    def method(self) -> str:
        return self.raw.method

    @property
    def url(self) -> str:
        return self.raw.url

    @property
    def body(self) -> bytes:
        return self.raw.body

def is_success(status: int) -> bool:
    """202 and every 2xx status count as success"""
    return status == 202 or 200 <= status <= 299

def check_response(response: Response) -> Optional[ErrorResponse]:
    """
    Classify a completed response.

    Returns None on success. On failure the body is decoded into the
    ``message``/``errors`` error shape; a body that is not a JSON object
    becomes the message verbatim. Status 401 yields an
    ``AuthenticationError``, anything else an ``ErrorResponse``.
    """
    if is_success(response.status):
        return None

    message = ""
    errors = None
    data = response.body
    if data:
        try:
            payload = json.loads(data)
        except ValueError:
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("message"), (str, type(None))):
            message = payload.get("message") or ""
            errors = payload.get("errors")
        else:
            message = data.decode("utf-8", errors="replace")

    return error_for_status(response, message, errors)

def decode_body(response: Response, into: Callable[[Any], Any]) -> Any:
    """
    Parse a successful response body as JSON and hand it to ``into``

    Args:
        response: Response whose status already classified as success
        into: Callable building the caller's payload from parsed JSON

    Returns:
        Whatever ``into`` returns
    """
    try:
        payload = json.loads(response.body)
    except ValueError as e:
        raise ResponseError(f"Failed to decode response body: {str(e)}")

    try:
        return into(payload)
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        raise ResponseError(f"Failed to decode response body: {str(e)}")

def raw_json(payload: Any) -> Any:
    """Decode target keeping the parsed JSON unchanged"""
    return payload
