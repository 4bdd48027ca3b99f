# mailerlite/api/client.py

from typing import Any, Callable, Optional, Tuple
from enum import Enum
import asyncio
import logging
import json
import aiohttp
import yarl
from datetime import datetime, UTC

from ..core.config import Config, DEFAULT_BASE_URL, DEFAULT_USER_AGENT
from ..core.logger import Logger
from .errors import OptionsEncodeError, RequestError, TransportError
from .options import add_options
from .response_handler import Response, check_response, decode_body, raw_json
from .transport import AiohttpTransport, PreparedRequest, RequestContext, Transport

logger = logging.getLogger(__name__)

class RequestMethod(Enum):
    """HTTP request methods used by the API"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

BODY_METHODS = (RequestMethod.POST, RequestMethod.PUT, RequestMethod.DELETE)
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, TransportError)

Decoder = Callable[[Any], Any]

class Client:
    """
    MailerLite API client.

    This class provides:
    - Request construction with bearer authentication
    - Query option encoding for reads, JSON bodies for writes
    - Cancellable dispatch through a pluggable transport
    - Status classification into typed errors

    The API key and transport may be swapped with the setters. Nothing
    guards them against concurrent calls: do not change either while
    requests are in flight.
    """

    def __init__(
        self,
        api_key: str,
        http_client: Optional[Transport] = None,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        self._api_base = base_url
        self._api_key = api_key
        self._user_agent = user_agent
        self._owns_transport = http_client is None
        self._http_client: Transport = http_client or AiohttpTransport()

    @classmethod
    def from_config(
        cls,
        config: Config,
        http_client: Optional[Transport] = None,
        configure_logging: bool = False
    ) -> "Client":
        """
        Build a client from ``config``

        Args:
            config: Source of the ``api.*`` settings
            http_client: Transport to use instead of a new aiohttp one
            configure_logging: Also apply the ``logging.*`` settings to
                the ``mailerlite`` logger, replacing its handlers. Off by
                default so handlers installed by the application survive.
        """
        if configure_logging:
            Logger(config)
        owns_transport = http_client is None
        if http_client is None:
            http_client = AiohttpTransport(timeout=config.get("api.timeout", 30.0))
        client = cls(
            api_key=str(config.get("api.key") or ""),
            http_client=http_client,
            base_url=config.get("api.base_url", DEFAULT_BASE_URL),
            user_agent=config.get("api.user_agent", DEFAULT_USER_AGENT)
        )
        client._owns_transport = owns_transport
        return client

    @property
    def base_url(self) -> str:
        return self._api_base

    @property
    def api_key(self) -> str:
        return self._api_key

    def set_api_key(self, api_key: str) -> None:
        self._api_key = api_key

    @property
    def http_client(self) -> Transport:
        return self._http_client

    def set_http_client(self, http_client: Transport) -> None:
        """Replace the transport, e.g. with a fake in tests"""
        self._http_client = http_client
        self._owns_transport = False

    async def close(self) -> None:
        """Close the transport if this client created it"""
        close = getattr(self._http_client, "close", None)
        if self._owns_transport and close is not None:
            await close()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def new_request(
        self,
        method: RequestMethod,
        path: str,
        payload: Any = None
    ) -> PreparedRequest:
        """
        Build an outbound request

        Args:
            method: HTTP method
            path: API-relative path, appended to the base URL as is
            payload: Options for GET, JSON body for POST/PUT/DELETE

        Returns:
            PreparedRequest with the standard headers set
        """
        try:
            method = RequestMethod(method)
        except ValueError:
            raise RequestError(f"Unsupported request method: {method}")

        url = f"{self._api_base}{path}"
        body = b""

        if method in BODY_METHODS:
            try:
                body = (json.dumps(payload) + "\n").encode("utf-8")
            except (TypeError, ValueError) as e:
                raise RequestError(f"Failed to encode request body: {str(e)}")
        elif method == RequestMethod.GET:
            # Options are best effort: on failure the URL goes out as built.
            try:
                url = add_options(url, payload)
            except OptionsEncodeError as e:
                logger.warning(
                    f"Ignoring request options: {e.message}",
                    extra={"method": method.value, "url": url}
                )

        try:
            yarl.URL(url)
        except (ValueError, TypeError) as e:
            raise RequestError(f"Invalid request URL {url!r}: {str(e)}")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
            "User-Agent": self._user_agent
        }
        return PreparedRequest(method=method.value, url=url, headers=headers, body=body)

    async def do(
        self,
        request: PreparedRequest,
        into: Optional[Decoder] = None,
        ctx: Optional[RequestContext] = None
    ) -> Response:
        """
        Send a request and classify the response

        Args:
            request: Request built by ``new_request``
            into: Callable building the payload from the JSON body, or
                None to skip decoding
            ctx: Cancellation context, background when omitted

        Returns:
            Response envelope with ``data`` set when ``into`` was given
        """
        ctx = ctx or RequestContext.background()
        context = {"method": request.method, "url": request.url}
        logger.debug("Sending request", extra=context)

        start_time = datetime.now(UTC)
        try:
            raw = await ctx.run(self._http_client.send(request))
        except Exception as e:
            if ctx.done():
                raise ctx.error() from e
            if not isinstance(e, TRANSPORT_ERRORS):
                raise
            logger.error(f"API request failed: {str(e)}", extra=context)
            raise TransportError(f"{request.method} {request.url}: {str(e)}") from e

        if raw is None:
            if ctx.done():
                raise ctx.error()
            logger.error("API request failed: transport returned no response", extra=context)
            raise TransportError(f"{request.method} {request.url}: no response from transport")

        response = Response(
            raw=raw,
            duration=(datetime.now(UTC) - start_time).total_seconds()
        )

        error = check_response(response)
        if error is not None:
            logger.warning(f"API error: {error}", extra=context)
            raise error

        if into is not None:
            response.data = decode_body(response, into)

        return response

    async def _call(
        self,
        method: RequestMethod,
        path: str,
        payload: Any,
        into: Optional[Decoder],
        ctx: Optional[RequestContext]
    ) -> Tuple[Any, Response]:
        request = self.new_request(method, path, payload)
        response = await self.do(request, into=into, ctx=ctx)
        return response.data, response

    async def list(
        self,
        path: str,
        options: Any = None,
        *,
        into: Optional[Decoder] = raw_json,
        ctx: Optional[RequestContext] = None
    ) -> Tuple[Any, Response]:
        """Perform a list (GET) request"""
        return await self._call(RequestMethod.GET, path, options, into, ctx)

    async def get(
        self,
        path: str,
        options: Any = None,
        *,
        into: Optional[Decoder] = raw_json,
        ctx: Optional[RequestContext] = None
    ) -> Tuple[Any, Response]:
        """Perform GET request"""
        return await self._call(RequestMethod.GET, path, options, into, ctx)

    async def create(
        self,
        path: str,
        body: Any = None,
        *,
        into: Optional[Decoder] = raw_json,
        ctx: Optional[RequestContext] = None
    ) -> Tuple[Any, Response]:
        """Perform POST request"""
        return await self._call(RequestMethod.POST, path, body, into, ctx)

    async def update(
        self,
        path: str,
        body: Any = None,
        *,
        into: Optional[Decoder] = raw_json,
        ctx: Optional[RequestContext] = None
    ) -> Tuple[Any, Response]:
        """Perform PUT request"""
        return await self._call(RequestMethod.PUT, path, body, into, ctx)

    async def delete(
        self,
        path: str,
        body: Any = None,
        *,
        into: Optional[Decoder] = None,
        ctx: Optional[RequestContext] = None
    ) -> Tuple[Any, Response]:
        """Perform DELETE request"""
        return await self._call(RequestMethod.DELETE, path, body, into, ctx)
