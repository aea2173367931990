"""
HTTP Client for the Notes Backend.

A thin async transport over httpx: base URL, timeout and the X-Frontend-ID
header come from configuration, every exchange is logged at debug level,
and transport failures are logged and re-raised for the service layer to
classify.
"""

import time
from typing import Any

import httpx

from masikip.core.config import get_api_endpoint
from masikip.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class APIClient:
    """
    HTTP client for the notes REST API.

    The underlying httpx.AsyncClient is created on first use and again after
    close(), so one APIClient can outlive several sessions.

    Usage:
        client = APIClient()
        response = await client.request("GET", "/notes")
        await client.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        frontend_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            base_url: Backend API base URL. If None, read from configuration.
            timeout: Request timeout in seconds. If None, read from configuration.
            frontend_id: Value of the X-Frontend-ID header. If None, read from configuration.
            transport: httpx transport to use instead of the network (tests).
        """
        if base_url is None or timeout is None or frontend_id is None:
            endpoint = get_api_endpoint()
            base_url = base_url or endpoint.base_url
            timeout = timeout if timeout is not None else endpoint.timeout
            frontend_id = frontend_id or endpoint.frontend_id

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.frontend_id = frontend_id
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def is_open(self) -> bool:
        return self._client is not None and not self._client.is_closed

    def _open(self) -> httpx.AsyncClient:
        if not self.is_open:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "X-Frontend-ID": self.frontend_id,
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self.is_open:
            await self._client.aclose()
        self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Send one request. Any status code is returned as a response.

        Args:
            method: HTTP method
            path: Path below the base URL, e.g. /notes/42
            **kwargs: Passed through to httpx (json=..., params=...)

        Raises:
            httpx.HTTPError: On transport failure
        """
        client = self._open()
        started = time.perf_counter()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger, "service", "error", "API request failed",
                method=method, path=path, error=str(e),
            )
            raise

        log_with_source(
            logger, "service", "debug", "API response",
            method=method,
            path=path,
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response


_client: APIClient | None = None


def get_api_client() -> APIClient:
    """Shared client built from configuration."""
    global _client
    if _client is None:
        _client = APIClient()
    return _client
