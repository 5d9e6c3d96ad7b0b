"""View-model and pure render functions for the console panels.

A panel is a list of ``(key, value)`` string rows. Rendering always
replaces every row; nothing is merged with what was displayed before.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from devicepanel.domain.models import ControlState, PanelName, PanelState

LAST_CMD_PLACEHOLDER = "-"
LAST_CMD_LABEL = "Last command"

Row = tuple[str, str]


class PanelView(BaseModel):
    """Display state of one panel."""

    name: PanelName
    title: str
    rows: list[Row] = Field(default_factory=list)
    state: PanelState = PanelState.EMPTY
    stale: bool = Field(default=False, description="Last fetch failed; rows are from an earlier fetch")


class ConsoleView(BaseModel):
    """Everything the console shows, independent of any display surface."""

    device_host: str = ""
    status: PanelView = Field(
        default_factory=lambda: PanelView(name=PanelName.STATUS, title="Status")
    )
    stats: PanelView = Field(
        default_factory=lambda: PanelView(name=PanelName.STATS, title="Statistics")
    )
    control: PanelView = Field(
        default_factory=lambda: PanelView(name=PanelName.CONTROL, title="Control")
    )

    def panel(self, name: PanelName) -> PanelView:
        return getattr(self, name.value)

    @property
    def panels(self) -> list[PanelView]:
        return [self.status, self.stats, self.control]

    @property
    def last_command(self) -> str:
        """The last-command indicator, or the placeholder if nothing is rendered."""
        for key, value in self.control.rows:
            if key == LAST_CMD_LABEL:
                return value
        return LAST_CMD_PLACEHOLDER


def format_value(value: Any) -> str:
    """Stringify a device-reported value the way it reads in the JSON."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def rows_from_mapping(data: Mapping[str, Any]) -> list[Row]:
    return [(str(key), format_value(value)) for key, value in data.items()]


def render_panel(panel: PanelView, data: Mapping[str, Any]) -> PanelView:
    """Replace all rows of ``panel`` with one row per entry of ``data``.

    Rows follow the mapping's iteration order. Rendering the same mapping
    twice gives the same rows.
    """
    panel.rows = rows_from_mapping(data)
    return panel


def render_control(panel: PanelView, data: Mapping[str, Any]) -> PanelView:
    """Render the control state: the last-command indicator first, then any extra keys."""
    state = ControlState.model_validate(dict(data))
    indicator = format_value(state.last_cmd) if state.has_command else LAST_CMD_PLACEHOLDER
    rows: list[Row] = [(LAST_CMD_LABEL, indicator)]
    rows.extend(rows_from_mapping(state.model_extra or {}))
    panel.rows = rows
    return panel
