"""Shared test fixtures for the devicepanel test suite.

Provides a recording fake device served through ``httpx.MockTransport``,
a mock DeviceClient, and sample device payloads.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, Union
from unittest.mock import AsyncMock

import httpx
import pytest

from devicepanel.client.base import DeviceClient
from devicepanel.client.http_backend import HttpDeviceClient
from devicepanel.render.panel import ConsoleView

Route = Union[dict, list, httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class RecordingDevice:
    """A fake device that answers from a route table and records every request."""

    def __init__(self, routes: dict[tuple[str, str], Route] | None = None) -> None:
        self.routes: dict[tuple[str, str], Route] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    def bodies(self, method: str, path: str) -> list[Any]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == method and r.url.path == path
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        if callable(route):
            return route(request)
        return httpx.Response(200, json=route)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> HttpDeviceClient:
        return HttpDeviceClient(base_url="http://device.local", transport=self.transport())


# ---------------------------------------------------------------------------
# Payload Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_status() -> dict[str, Any]:
    """A trimmed trainer status as the firmware reports it."""
    return {
        "lesson": 3,
        "frequency": 600,
        "speed": 20,
        "decoderEnabled": True,
        "waveform": "Sine",
    }


@pytest.fixture
def sample_stats() -> dict[str, Any]:
    return {"sessions": 4, "characters": 812, "bestWPM": 18.5}


# ---------------------------------------------------------------------------
# Device Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def device(sample_status: dict[str, Any], sample_stats: dict[str, Any]) -> RecordingDevice:
    """A healthy fake device with all five endpoints routed."""
    return RecordingDevice(
        {
            ("GET", "/api/status"): sample_status,
            ("GET", "/api/stats"): sample_stats,
            ("GET", "/api/control"): {"lastCmd": "PING"},
            ("POST", "/api/control"): {"ok": True},
            ("POST", "/api/stats"): {"ok": True},
        }
    )


@pytest.fixture
def http_client(device: RecordingDevice) -> HttpDeviceClient:
    """An unconnected HttpDeviceClient talking to ``device``."""
    return device.client()


@pytest.fixture
def view() -> ConsoleView:
    return ConsoleView(device_host="device.local")


@pytest.fixture
def mock_client() -> AsyncMock:
    """A mock DeviceClient for testing components without HTTP."""
    mock = AsyncMock(spec=DeviceClient)
    return mock


@pytest.fixture
def make_device() -> type[RecordingDevice]:
    """The RecordingDevice class, for tests that need a custom route table."""
    return RecordingDevice
