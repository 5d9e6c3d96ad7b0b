"""Core domain models for devicepanel.

These models represent the data flowing through the console: snapshots
fetched from the device, the request bodies sent to it, and the typed
results of each refresh and command so callers can tell success from
failure without scraping logs.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# A device-reported JSON object. Keys are device-defined; insertion order
# is display order. Used for both the status and the stats snapshots.
Snapshot = dict[str, Any]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class PanelName(str, enum.Enum):
    """The three data sources, one panel each."""

    STATUS = "status"
    STATS = "stats"
    CONTROL = "control"

    @property
    def path(self) -> str:
        return f"/api/{self.value}"


class PanelState(str, enum.Enum):
    """Lifecycle of a single panel."""

    EMPTY = "empty"  # Nothing fetched yet
    LOADING = "loading"  # First fetch in flight
    DISPLAYED = "displayed"  # At least one successful fetch rendered


# ---------------------------------------------------------------------------
# Device payloads
# ---------------------------------------------------------------------------


class ControlState(BaseModel):
    """Body of GET /api/control.

    ``lastCmd`` is absent (or empty, as the firmware reports it at boot)
    until a command has been issued. Unknown keys are kept.
    """

    model_config = ConfigDict(extra="allow")

    # Kept as reported; the renderer stringifies it like any other value
    last_cmd: Any = Field(default=None, alias="lastCmd")

    @property
    def has_command(self) -> bool:
        return self.last_cmd is not None and self.last_cmd != ""


class CommandRequest(BaseModel):
    """Body of POST /api/control."""

    cmd: str = Field(description="Command name the device understands; opaque, may be empty")


class ResetRequest(BaseModel):
    """Body of POST /api/stats."""

    reset: bool = True


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class RefreshResult(BaseModel):
    """Outcome of refreshing one panel."""

    panel: PanelName
    ok: bool
    data: Snapshot | None = Field(default=None, description="Fetched mapping on success")
    error: str | None = Field(default=None, description="Failure description on error")
    superseded: bool = Field(
        default=False,
        description="Fetch succeeded but a later-issued fetch had already been rendered",
    )
    finished_at: datetime = Field(default_factory=datetime.now)

    @property
    def rendered(self) -> bool:
        return self.ok and not self.superseded


class CommandResult(BaseModel):
    """Outcome of a command or stats reset, including the refresh it triggered."""

    action: str = Field(description="Command string sent, or 'reset-stats'")
    ok: bool
    error: str | None = None
    refresh: list[RefreshResult] = Field(default_factory=list)
