"""Panel rendering for devicepanel.

Rendering is split in two: a pure projection of device mappings into
view-model rows (``panel``), and a rich projection of the view-model onto
the terminal (``console``).
"""

from devicepanel.render.panel import (
    LAST_CMD_PLACEHOLDER,
    ConsoleView,
    PanelView,
    format_value,
    render_control,
    render_panel,
)

__all__ = [
    "LAST_CMD_PLACEHOLDER",
    "ConsoleView",
    "PanelView",
    "format_value",
    "render_control",
    "render_panel",
]
