# myqnapcloud/api/transport.py

from typing import Dict, Any, Optional, Mapping, AsyncIterator, Protocol
import asyncio
import logging
import aiohttp
import yarl

from .errors import TransportError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

class TransportResponse(Protocol):
    """An open response whose body has not been read yet"""
    status: int
    headers: Mapping[str, str]

    async def read(self) -> bytes:
        """Read the whole body"""
        ...

    def iter_chunks(self) -> AsyncIterator[bytes]:
        """Stream the body"""
        ...

    def release(self) -> None:
        """Give the underlying connection back"""
        ...

class Transport(Protocol):
    """
    Protocol for the component that performs network I/O.

    Implementations own credentials, TLS, proxies and timeouts. Failures to
    complete an exchange must surface as TransportError.
    """

    async def execute(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes]
    ) -> TransportResponse:
        ...

    async def close(self) -> None:
        ...

class SecurityProvider(Protocol):
    """Protocol for security providers"""
    async def get_auth_header(self) -> Dict[str, str]:
        """Get authentication header"""
        ...

class AiohttpResponse:
    """TransportResponse backed by an ``aiohttp.ClientResponse``"""

    def __init__(self, response: aiohttp.ClientResponse):
        self._response = response
        self.status = response.status
        self.headers = dict(response.headers)

    async def read(self) -> bytes:
        try:
            return await self._response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Failed to read response body: {str(e)}") from e

    async def iter_chunks(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.content.iter_chunked(CHUNK_SIZE):
                yield chunk
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Failed to read response body: {str(e)}") from e

    def release(self) -> None:
        self._response.release()

class AiohttpTransport:
    """
    Default transport built on aiohttp.

    Pass ``session`` to reuse a ClientSession configured elsewhere (auth
    middleware, proxies, TLS); it is then left open by ``close()``.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        security: Optional[SecurityProvider] = None,
        timeout: Optional[float] = None,
        verify_ssl: bool = True
    ):
        self._session = session
        self._owns_session = session is None
        self.security = security
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self._session is None or (self._owns_session and self._session.closed):
            session_kwargs: Dict[str, Any] = {}
            if self.timeout:
                session_kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(**session_kwargs)
            self._owns_session = True
        elif self._session.closed:
            raise TransportError("The injected aiohttp session is closed")
        return self._session

    async def execute(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes]
    ) -> AiohttpResponse:
        session = await self._get_session()
        request_headers = dict(headers)
        if self.security:
            request_headers.update(await self.security.get_auth_header())

        kwargs: Dict[str, Any] = {"headers": request_headers, "data": body}
        if not self.verify_ssl:
            kwargs["ssl"] = False

        try:
            response = await session.request(method, yarl.URL(url, encoded=True), **kwargs)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"{method} {url} failed: {e.__class__.__name__}: {str(e)}")
            raise TransportError(f"{method} {url} failed: {str(e) or e.__class__.__name__}") from e
        return AiohttpResponse(response)

    async def close(self) -> None:
        """Close the session if this transport created it"""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
