"""
Transport protocol.

The services only need something that can issue one request against the
API gateway and return the body; AsyncAPIClient is the aiohttp-backed
implementation.
"""
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Protocol for request/response transports."""

    async def request(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Issue one API request.

        Args:
            path: Path below the gateway, e.g. 'ISteamWebAPIUtil/GetServerInfo/v0001'
            params: Query string parameters (GET)
            data: Form fields; when given the request is a POST

        Returns:
            Response body

        Raises:
            TransportError: On network failure or a non-200 status
        """
        ...

    async def fetch(self, url: str) -> bytes:
        """Download an absolute URL and return its bytes."""
        ...
