"""
Async Steam Web API client.

The transport used by every service: one HTTP call per request, no
batching and no retries.
"""
import asyncio
from typing import Any, Dict, Mapping, Optional

import aiohttp

from .config import APIConfig
from ..exceptions import TransportError
from ..logging import get_logger


class AsyncAPIClient:
    """
    Asynchronous Steam Web API client.

    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts
    - Connection pooling through one aiohttp session
    - Fixed Steam mobile client headers

    Example:
        >>> async with AsyncAPIClient() as client:
        ...     body = await client.request('ISteamWebAPIUtil/GetServerInfo/v0001')
    """

    def __init__(self, config: Optional[APIConfig] = None):
        """
        Initialize async API client.

        Args:
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False

        self._logger = get_logger('steamchat.api')

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None

    def _build_url(self, path: str) -> str:
        return f"{self._config.gateway}{path.lstrip('/')}"

    def _proxy(self) -> Optional[str]:
        return self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None

    async def request(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Make a request to the Steam Web API.

        Args:
            path: Interface path below the gateway
            params: Query string parameters (GET requests)
            data: Form fields; a POST is sent when given

        Returns:
            Response body text

        Raises:
            TransportError: If the client is closed, the request fails or
                the status is not 200
        """
        if self._closed:
            raise TransportError("Client is closed")

        session = await self._ensure_session()
        url = self._build_url(path)
        method = 'GET' if data is None else 'POST'

        self._logger.debug(f"{method} {url}")

        try:
            if data is None:
                ctx = session.get(url, params=params, proxy=self._proxy())
            else:
                ctx = session.post(url, params=params, data=data, proxy=self._proxy())

            async with ctx as response:
                if response.status != 200:
                    self._logger.warning(f"{method} {path} returned HTTP {response.status}")
                    raise TransportError(
                        f"HTTP {response.status} from {path}",
                        status=response.status
                    )

                body = await response.text()
                self._logger.debug(f"Response data: {body[:1000] if len(body) > 1000 else body}")
                return body

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"Network error on {path}: {e}")
            raise TransportError(f"Network error: {e}") from e

    async def fetch(self, url: str) -> bytes:
        """
        Download an absolute URL (e.g. an avatar image).

        Raises:
            TransportError: If the download fails or the status is not 200
        """
        if self._closed:
            raise TransportError("Client is closed")

        session = await self._ensure_session()

        try:
            async with session.get(url, proxy=self._proxy()) as response:
                if response.status != 200:
                    raise TransportError(f"HTTP {response.status} from {url}", status=response.status)
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"Network error fetching {url}: {e}")
            raise TransportError(f"Network error: {e}") from e
