"""HTTP device client.

Talks to the companion device's JSON API with httpx.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from devicepanel.client.base import (
    CommandError,
    DeviceClient,
    DeviceError,
    ParseError,
    TransportError,
)
from devicepanel.domain.models import Snapshot

logger = logging.getLogger(__name__)


class HttpDeviceClient(DeviceClient):
    """Fetches snapshots from and posts commands to the device over HTTP.

    Timeouts are left at the httpx defaults.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def device_host(self) -> str:
        """Host part of the device address, shown in the console header."""
        return httpx.URL(self._base_url).host

    async def connect(self) -> None:
        """Create the HTTP client."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            transport=self._transport,
        )
        logger.info("Device client ready for %s", self._base_url)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Device client closed")

    async def get_json(self, path: str) -> Snapshot:
        """GET ``path`` and decode the body as a JSON object."""
        client = self._require_client(path, TransportError)
        try:
            resp = await client.get(path)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(path, e) from e

        try:
            body = resp.json()
        except ValueError as e:
            raise ParseError(path, e) from e
        if not isinstance(body, dict):
            raise ParseError(path, f"expected a JSON object, got {type(body).__name__}")

        logger.debug("GET %s -> %d keys", path, len(body))
        return body

    async def post_json(self, path: str, payload: dict[str, Any]) -> None:
        """POST ``payload`` to ``path``; only the status code is checked."""
        client = self._require_client(path, CommandError)
        try:
            resp = await client.post(path, json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise CommandError(path, e) from e
        logger.debug("POST %s %s -> %d", path, payload, resp.status_code)

    def _require_client(self, path: str, error: type[DeviceError]) -> httpx.AsyncClient:
        if self._client is None:
            raise error(path, "client is not connected")
        return self._client
