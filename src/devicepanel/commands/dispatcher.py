"""Sends operator commands to the device and refreshes the affected panels.

Commands are fire-and-forget: nothing tracks whether one is in flight, so
repeated invocations may overlap.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable, Mapping

from devicepanel.client.base import CommandError, DeviceClient
from devicepanel.config.settings import RESET_STATS_ID
from devicepanel.domain.models import CommandRequest, CommandResult, PanelName, ResetRequest
from devicepanel.poller.scheduler import PanelScheduler

logger = logging.getLogger(__name__)

Handler = Callable[[], Awaitable[CommandResult]]


class UnknownCommandError(KeyError):
    """Raised when dispatching an identifier with no bound handler."""

    def __init__(self, identifier: str, known: list[str]) -> None:
        super().__init__(identifier)
        self.identifier = identifier
        self.known = known

    def __str__(self) -> str:
        return f"unknown command {self.identifier!r} (known: {', '.join(self.known)})"


class CommandDispatcher:
    """Maps operator-facing identifiers to device commands.

    Every command POST is followed by a refresh, whether or not the POST
    succeeded: a named command refreshes the control panel, a stats reset
    refreshes every panel.
    """

    def __init__(
        self,
        client: DeviceClient,
        scheduler: PanelScheduler,
        bindings: Mapping[str, str] | None = None,
    ) -> None:
        self._client = client
        self._scheduler = scheduler
        self._handlers: dict[str, Handler] = {
            ident: functools.partial(self.send_command, cmd)
            for ident, cmd in (bindings or {}).items()
        }
        self._handlers[RESET_STATS_ID] = self.reset_stats

    @property
    def handlers(self) -> Mapping[str, Handler]:
        return dict(self._handlers)

    async def dispatch(self, identifier: str) -> CommandResult:
        """Run the handler bound to ``identifier``."""
        try:
            handler = self._handlers[identifier]
        except KeyError:
            raise UnknownCommandError(identifier, sorted(self._handlers)) from None
        return await handler()

    async def send_command(self, name: str) -> CommandResult:
        """POST ``{"cmd": name}`` to the control endpoint, then refresh the control panel."""
        body = CommandRequest(cmd=name).model_dump()
        error = await self._post(PanelName.CONTROL.path, body)
        if error is None:
            logger.info("Sent command %r", name)
        refresh = await self._scheduler.refresh_control()
        return CommandResult(action=name, ok=error is None, error=error, refresh=[refresh])

    async def reset_stats(self) -> CommandResult:
        """POST a reset flag to the stats endpoint, then refresh every panel."""
        body = ResetRequest().model_dump()
        error = await self._post(PanelName.STATS.path, body)
        if error is None:
            logger.info("Requested stats reset")
        refresh = await self._scheduler.refresh_all()
        return CommandResult(action=RESET_STATS_ID, ok=error is None, error=error, refresh=refresh)

    async def _post(self, path: str, body: dict) -> str | None:
        try:
            await self._client.post_json(path, body)
        except CommandError as e:
            logger.error("Command to %s failed: %s", e.path, e.cause)
            return str(e)
        return None
