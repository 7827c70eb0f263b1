"""HTTP client for the Swift recon diagnostic endpoint."""

import logging
from typing import Any, Dict, Optional

import httpx

from ..errors import ReconError


class ReconClient:
    """
    Fetch and decode JSON resources from ``<address>/recon/<resource>``.

    A single ``httpx.AsyncClient`` is opened per collection cycle with
    ``session()``; ``fetch()`` reuses it when one is open.
    """

    def __init__(
        self,
        address: str,
        timeout_seconds: float = 10.0,
        logger: logging.Logger = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize recon client.

        Args:
            address: Base URL of the Swift server, e.g. http://127.0.0.1:6000
            timeout_seconds: Per-request deadline
            logger: Optional logger instance
            transport: Optional httpx transport (used by tests)
        """
        self.address = address.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)
        self._client: Optional[httpx.AsyncClient] = None

    def url_for(self, resource: str) -> str:
        return f"{self.address}/recon/{resource}"

    def session(self) -> "_ReconSession":
        """Return an async context manager holding one HTTP client for a cycle."""
        return _ReconSession(self)

    async def fetch(self, resource: str) -> Dict[str, Any]:
        """
        GET a recon resource and decode its JSON object body.

        Args:
            resource: Resource path below /recon/, e.g. "replication/object"

        Returns:
            Dict[str, Any]: Decoded JSON object

        Raises:
            ReconError: On transport failure, non-2xx status or invalid body
        """
        url = self.url_for(resource)
        self.logger.debug(f"Fetching {url}")

        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with self._new_client() as client:
                    response = await client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ReconError(resource, f"request timed out after {self.timeout_seconds}s") from e
        except httpx.HTTPError as e:
            raise ReconError(resource, str(e)) from e

        try:
            body = response.json()
        except (ValueError, RecursionError) as e:
            raise ReconError(resource, f"invalid JSON body: {e}") from e

        if not isinstance(body, dict):
            raise ReconError(resource, f"expected JSON object, got {type(body).__name__}")

        return body

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout_seconds,
            transport=self.transport,
            follow_redirects=True
        )


class _ReconSession:
    """Async context manager binding a shared AsyncClient to a ReconClient."""

    def __init__(self, recon: ReconClient):
        self.recon = recon

    async def __aenter__(self) -> ReconClient:
        self.recon._client = self.recon._new_client()
        return self.recon

    async def __aexit__(self, exc_type, exc, tb) -> None:
        client, self.recon._client = self.recon._client, None
        if client is not None:
            await client.aclose()
