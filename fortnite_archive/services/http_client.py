"""API client service for FortniteAPI.io and the inter-request delay."""

import asyncio
from typing import Any

import httpx
import structlog

from ..models import ArchiveConfig
from .errors import get_error_service

log = structlog.stdlib.get_logger()


async def delay(seconds: float) -> None:
    """Suspend between network-touching steps."""
    if seconds <= 0:
        return
    log.debug("Pausing between requests", seconds=seconds)
    await asyncio.sleep(seconds)


class ApiClientService:
    """Authenticated GET wrapper around the FortniteAPI.io REST surface.

    Failures never raise: transport errors, non-2xx statuses and bodies that
    are not UTF-8 JSON are logged and reported as ``None``. No retries are
    attempted.
    """

    def __init__(
        self,
        config: ArchiveConfig,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            config: Archive configuration supplying base URL and credential
            timeout: Request timeout in seconds
            transport: Optional transport override (used by tests)
        """
        self.base_url = config.base_url
        self.timeout = timeout

        headers = {"User-Agent": "fortnite-data-archive/1.0"}
        # The API expects the bare key, not a "Bearer" scheme
        if config.api_key:
            headers["Authorization"] = config.api_key

        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(timeout),
            headers=headers,
            follow_redirects=True,
            transport=transport,
        )

        log.debug(
            "API client initialized",
            base_url=config.base_url,
            timeout=timeout,
            authenticated=config.api_key is not None,
        )

    async def fetch_json(self, path: str) -> Any | None:
        """GET ``path`` (query string included) and decode the JSON body.

        Args:
            path: API path relative to the base URL, e.g. ``/v1/weapons/list``

        Returns:
            The decoded body on a 2xx response, otherwise None
        """
        try:
            log.debug("Making API request", path=path)
            response = await self._client.get(path)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            get_error_service().handle_error(
                e,
                operation="fetch_json",
                component="api_client",
                context={"url": path, "payload": self._error_payload(e.response)},
            )
            return None
        except (httpx.RequestError, ValueError) as e:
            get_error_service().handle_error(
                e,
                operation="fetch_json",
                component="api_client",
                context={"url": path},
            )
            return None

        log.debug(
            "API request successful",
            path=path,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return data

    @staticmethod
    def _error_payload(response: httpx.Response) -> Any:
        """Remote error body, decoded when it is JSON."""
        try:
            return response.json()
        except ValueError:
            return response.text or None

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.debug("API client closed")

    async def __aenter__(self) -> "ApiClientService":
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        await self.close()
