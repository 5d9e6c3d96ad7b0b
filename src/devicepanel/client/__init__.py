"""Device client module for devicepanel.

Fetches JSON snapshots from the companion device and posts commands to
it. The abstract interface keeps the poller and the dispatcher
independent of the HTTP transport.

Public API:
    DeviceClient -- Abstract base class
    HttpDeviceClient -- httpx-based client for the device's HTTP API
"""

from devicepanel.client.base import (
    CommandError,
    DeviceClient,
    DeviceError,
    FetchError,
    ParseError,
    TransportError,
)

__all__ = [
    "CommandError",
    "DeviceClient",
    "DeviceError",
    "FetchError",
    "HttpDeviceClient",
    "ParseError",
    "TransportError",
]


def __getattr__(name: str) -> type:
    """Lazy import for the concrete client, which requires httpx."""
    if name == "HttpDeviceClient":
        from devicepanel.client.http_backend import HttpDeviceClient
        return HttpDeviceClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
