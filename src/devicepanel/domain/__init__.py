"""Domain models for devicepanel.

This package contains the data structures exchanged with the device and
the typed outcomes of refreshes and commands. All models use Pydantic v2
for validation and serialization.
"""

from devicepanel.domain.models import (
    CommandRequest,
    CommandResult,
    ControlState,
    PanelName,
    PanelState,
    RefreshResult,
    ResetRequest,
    Snapshot,
)

__all__ = [
    "CommandRequest",
    "CommandResult",
    "ControlState",
    "PanelName",
    "PanelState",
    "RefreshResult",
    "ResetRequest",
    "Snapshot",
]
