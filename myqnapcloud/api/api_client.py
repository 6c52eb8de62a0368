# myqnapcloud/api/api_client.py

from typing import Dict, Any, Optional, Union
from dataclasses import dataclass
from datetime import datetime, UTC
import asyncio
import logging
import time
import aiohttp
import yarl

from ..core.config import Config
from ..core.exceptions import ConfigError
from .destinations import Destination, DestinationKind
from .errors import TransportError
from .request_builder import RequestBuilder, RequestMethod, PreparedRequest
from .response_handler import check_response
from .transport import AiohttpTransport, Transport

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "v1.1"

@dataclass
class ServiceConfig:
    """
    Configuration for the API client.

    Fixed once constructed, except ``debug`` which may be toggled between
    calls.
    """
    base_path: str
    version: str = DEFAULT_API_VERSION
    user_agent: str = ""  # not sent; see DESIGN.md
    debug: bool = False

    def __post_init__(self) -> None:
        if not self.base_path or not isinstance(self.base_path, str):
            raise ConfigError("base_path is required")
        scheme = yarl.URL(self.base_path).scheme
        if scheme not in ("http", "https"):
            raise ConfigError(f"base_path must be an http(s) URL: {self.base_path!r}")
        if not self.version or not str(self.version).strip("/"):
            raise ConfigError("version is required")
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False) and name != "debug":
            raise ConfigError(f"ServiceConfig.{name} cannot be changed after construction")
        object.__setattr__(self, name, value)

    @classmethod
    def from_config(cls, config: Config) -> "ServiceConfig":
        """Build from the ``api`` section of a layered Config"""
        base_path = config.get("api.base_path")
        if not base_path:
            raise ConfigError("api.base_path is not configured (set MYQNAPCLOUD_API_BASE_PATH)")
        return cls(
            base_path=str(base_path),
            version=str(config.get("api.version", DEFAULT_API_VERSION)),
            user_agent=str(config.get("api.user_agent") or ""),
            debug=bool(config.get("api.debug", False))
        )

@dataclass
class APIResponse:
    """Metadata of a completed API call"""
    method: str
    url: str
    status: int
    headers: Dict[str, str]
    timestamp: datetime
    duration: float

class APIClient:
    """
    Sends requests to the account API and classifies the responses.

    Every call goes through the same sequence: build, send, classify, then
    decode into the destination. The client keeps no per-call state, so one
    instance can serve concurrent calls.
    """

    def __init__(
        self,
        config: ServiceConfig,
        transport: Optional[Transport] = None
    ):
        self.config = config
        self._owns_transport = transport is None
        self.transport: Transport = transport if transport is not None else AiohttpTransport()
        self.builder = RequestBuilder(config.base_path, config.version)

    async def close(self) -> None:
        """Close the transport if this client created it"""
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _send(self, request: PreparedRequest):
        try:
            return await self.transport.execute(
                request.method, request.url, request.headers, request.body
            )
        except TransportError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            logger.warning(f"{request.method} {request.url} failed: {e.__class__.__name__}: {str(e)}")
            raise TransportError(f"{request.method} {request.url} failed: {str(e) or e.__class__.__name__}") from e

    async def request(
        self,
        method: Union[RequestMethod, str],
        path: str,
        payload: Any = None,
        destination: Optional[Destination] = None
    ) -> APIResponse:
        """
        Make an API request

        Args:
            method: HTTP method to use
            path: Path relative to the versioned API root
            payload: Value sent as the JSON request body
            destination: Where a successful body goes; discarded when None

        Returns:
            APIResponse with the call's metadata

        Raises:
            EncodingError: payload could not be serialized, nothing was sent
            TransportError: the exchange did not complete
            ErrorResult: the API answered with a non-2xx status
            DecodeError: a body could not be decoded
        """
        request = self.builder.build(method, path, payload)

        if self.config.debug:
            logger.debug(f"Executing request {request.method} {request.url}: headers={request.headers} body_length={len(request.body or b'')}")

        start_time = time.monotonic()
        response = await self._send(request)
        try:
            if self.config.debug:
                logger.debug(f"Response received for {request.method} {request.url}: status={response.status} headers={dict(response.headers)}")

            await check_response(request, response)

            if destination is not None:
                if destination.kind is DestinationKind.RAW:
                    chunks = [chunk async for chunk in response.iter_chunks()]
                    for chunk in chunks:
                        destination.write(chunk)
                else:
                    destination.decode(await response.read())
        finally:
            response.release()

        return APIResponse(
            method=request.method,
            url=request.url,
            status=response.status,
            headers=dict(response.headers),
            timestamp=datetime.now(UTC),
            duration=time.monotonic() - start_time
        )

    async def get(
        self,
        path: str,
        destination: Optional[Destination] = None
    ) -> APIResponse:
        """Perform GET request"""
        return await self.request(RequestMethod.GET, path, destination=destination)

    async def post(
        self,
        path: str,
        payload: Any = None,
        destination: Optional[Destination] = None
    ) -> APIResponse:
        """Perform POST request"""
        return await self.request(RequestMethod.POST, path, payload, destination)

    async def put(
        self,
        path: str,
        payload: Any = None,
        destination: Optional[Destination] = None
    ) -> APIResponse:
        """Perform PUT request"""
        return await self.request(RequestMethod.PUT, path, payload, destination)

    async def patch(
        self,
        path: str,
        payload: Any = None,
        destination: Optional[Destination] = None
    ) -> APIResponse:
        """Perform PATCH request"""
        return await self.request(RequestMethod.PATCH, path, payload, destination)

    async def delete(
        self,
        path: str,
        payload: Any = None,
        destination: Optional[Destination] = None
    ) -> APIResponse:
        """Perform DELETE request"""
        return await self.request(RequestMethod.DELETE, path, payload, destination)
