"""Global test configuration and fixtures."""
import inspect
import json
import pytest

from mailerlite.api.client import Client
from mailerlite.api.response_handler import Response
from mailerlite.api.transport import RawResponse

TEST_KEY = "valid-api-key"
SUBSCRIBERS_URL = "https://connect.mailerlite.com/api/subscribers"

class FakeTransport:
    """Transport answering every request through ``handler`` without network I/O"""

    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    async def send(self, request):
        self.requests.append(request)
        result = self.handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result

def _reply(request, status, body=b"", headers=None):
    """Raw response for ``request``; dict and list bodies are JSON-encoded"""
    if isinstance(body, (dict, list)):
        body = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        body = body.encode("utf-8")
    return RawResponse(
        status=status,
        headers=headers or {"Content-Type": "application/json"},
        body=body,
        method=request.method,
        url=request.url
    )

@pytest.fixture
def make_response():
    """Build a response envelope for a GET to the subscribers endpoint"""
    def factory(status, body=b"", method="GET", url=SUBSCRIBERS_URL):
        if isinstance(body, str):
            body = body.encode("utf-8")
        return Response(raw=RawResponse(
            status=status,
            headers={},
            body=body,
            method=method,
            url=url
        ))
    return factory

@pytest.fixture
def fake_transport():
    return FakeTransport

@pytest.fixture
def client():
    return Client(TEST_KEY)

@pytest.fixture
def reply():
    return _reply
