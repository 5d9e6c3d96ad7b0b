"""Rich projection of the console view-model."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from devicepanel.domain.models import PanelState
from devicepanel.render.panel import ConsoleView, PanelView


def panel_table(panel: PanelView) -> Table:
    """Build a two-column key/value table for one panel."""
    table = Table(title=panel.title, title_justify="left", expand=True, show_header=False)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="yellow")
    if panel.state is PanelState.EMPTY and not panel.rows:
        table.add_row(Text("Waiting for data...", style="dim"), "")
    elif panel.state is PanelState.LOADING and not panel.rows:
        table.add_row(Text("Loading...", style="dim"), "")
    for key, value in panel.rows:
        table.add_row(key, value)
    return table


def build_renderable(view: ConsoleView) -> Panel:
    """Build the full console: device header plus one table per panel."""
    header = Text(f"Device: {view.device_host or 'unknown'}", style="bold magenta")
    return Panel(
        Group(header, *(panel_table(p) for p in view.panels)),
        title="devicepanel",
        border_style="cyan",
    )
