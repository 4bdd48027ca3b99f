# mailerlite/api/transport.py

from typing import Awaitable, Dict, Optional, Protocol, TypeVar
from dataclasses import dataclass, field
import asyncio
import inspect
import logging
import time
import aiohttp
import yarl

from .errors import RequestCancelledError, DeadlineExceededError

T = TypeVar('T')
logger = logging.getLogger(__name__)

@dataclass
class PreparedRequest:
    """Fully-formed outbound request"""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

@dataclass
class RawResponse:
    """Response as returned by a transport, body already read"""
    status: int
    headers: Dict[str, str]
    body: bytes
    method: str
    url: str

class Transport(Protocol):
    """Protocol for pluggable HTTP transports"""
    async def send(self, request: PreparedRequest) -> Optional[RawResponse]:
        """Send the request and return the raw response"""
        ...

class AiohttpTransport:
    """
    Default transport backed by a shared aiohttp session.

    The session is created lazily on first use and reused until
    ``close`` is called.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self.timeout = timeout
        self._session = session

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self) -> None:
        """Close the underlying session"""
        if self._session and not self._session.closed:
            await self._session.close()

    async def send(self, request: PreparedRequest) -> RawResponse:
        session = await self._get_session()
        async with session.request(
            request.method,
            yarl.URL(request.url),
            data=request.body or None,
            headers=request.headers
        ) as response:
            body = await response.read()
            return RawResponse(
                status=response.status,
                headers=dict(response.headers),
                body=body,
                method=request.method,
                url=request.url
            )

class RequestContext:
    """
    Cancellation scope for a single API call.

    A context ends when ``cancel`` is called or when its optional
    deadline passes. Work bound with ``run`` is abandoned as soon as
    the context ends.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._cancelled = asyncio.Event()
        self._deadline: Optional[float] = None
        if timeout is not None:
            self._deadline = time.monotonic() + timeout

    @classmethod
    def background(cls) -> "RequestContext":
        """Context that is never cancelled and has no deadline"""
        return cls()

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, None without one"""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def done(self) -> bool:
        return self.error() is not None

    def error(self) -> Optional[RequestCancelledError]:
        """Cause of the context ending, None while still active"""
        if self._cancelled.is_set():
            return RequestCancelledError("context canceled")
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceededError("context deadline exceeded")
        return None

    async def run(self, aw: Awaitable[T]) -> T:
        """Await ``aw`` unless the context ends first"""
        error = self.error()
        if error is not None:
            # Already ended: never start the work.
            if inspect.iscoroutine(aw):
                aw.close()
            raise error

        task = asyncio.ensure_future(aw)
        waiter = asyncio.ensure_future(self._cancelled.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()

        if task in done:
            return task.result()

        await asyncio.gather(task, return_exceptions=True)
        error = self.error() or DeadlineExceededError("context deadline exceeded")
        logger.debug(f"Request abandoned: {error}")
        raise error
