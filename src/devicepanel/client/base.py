"""Abstract base class for talking to the companion device.

The poller only needs "GET a path, give me a JSON object" and the
dispatcher only needs "POST this JSON to a path". Keeping those two
operations behind an interface lets tests drive both without a network.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from devicepanel.domain.models import Snapshot

logger = logging.getLogger(__name__)


class DeviceClient(ABC):
    """Abstract interface for the device's JSON-over-HTTP API.

    Example usage::

        async with HttpDeviceClient(base_url="http://192.168.1.50") as client:
            status = await client.get_json("/api/status")
            await client.post_json("/api/control", {"cmd": "PING"})
    """

    @abstractmethod
    async def connect(self) -> None:
        """Prepare the underlying transport. Safe to call more than once."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the underlying transport. Safe to call more than once."""
        ...

    @abstractmethod
    async def get_json(self, path: str) -> Snapshot:
        """Fetch ``path`` and return its body as a JSON object.

        No retries are attempted.

        Raises:
            TransportError: The request failed or returned a non-2xx status.
            ParseError: The body is not valid JSON or not a JSON object.
        """
        ...

    @abstractmethod
    async def post_json(self, path: str, payload: dict[str, Any]) -> None:
        """POST ``payload`` as JSON to ``path``. The response body is ignored.

        Raises:
            CommandError: The request failed or returned a non-2xx status.
        """
        ...

    async def __aenter__(self) -> DeviceClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()


class DeviceError(Exception):
    """Base class for failures talking to the device."""

    def __init__(self, path: str, cause: BaseException | str) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class FetchError(DeviceError):
    """Raised when a snapshot GET fails."""


class TransportError(FetchError):
    """The device was unreachable or answered with a non-success status."""


class ParseError(FetchError):
    """The device answered, but not with a JSON object."""


class CommandError(DeviceError):
    """Raised when a command POST fails."""
