"""Periodic and on-demand refresh of the three device panels.

Each panel refreshes independently: a failing source leaves its own
panel stale and never delays or aborts the other two.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from devicepanel.client.base import DeviceClient, FetchError
from devicepanel.domain.models import PanelName, PanelState, RefreshResult
from devicepanel.render.panel import ConsoleView, PanelView, render_control, render_panel

logger = logging.getLogger(__name__)

# Seconds between refresh cycles
POLL_INTERVAL = 5.0

Renderer = Callable[[PanelView, Mapping[str, Any]], PanelView]

_RENDERERS: dict[PanelName, Renderer] = {
    PanelName.STATUS: render_panel,
    PanelName.STATS: render_panel,
    PanelName.CONTROL: render_control,
}


class PanelScheduler:
    """Drives refresh cycles for the status, stats and control panels.

    A timer started with :meth:`start` runs :meth:`refresh_all` right away
    and then every ``interval`` seconds. Ticks do not wait for the previous
    cycle, so cycles may overlap. When two fetches for the same panel are in
    flight, the one issued last wins: a slower, older fetch that settles
    afterwards is reported as superseded and not rendered.
    """

    def __init__(
        self,
        client: DeviceClient,
        view: ConsoleView | None = None,
        interval: float = POLL_INTERVAL,
    ) -> None:
        self._client = client
        self._view = view if view is not None else ConsoleView()
        self._interval = interval
        self._issued: dict[PanelName, int] = {name: 0 for name in PanelName}
        self._applied: dict[PanelName, int] = {name: 0 for name in PanelName}
        self._timer: asyncio.Task[None] | None = None
        self._cycles: set[asyncio.Task[list[RefreshResult]]] = set()
        self._cycle_count = 0

    @property
    def view(self) -> ConsoleView:
        return self._view

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def cycle_count(self) -> int:
        """Number of refresh cycles started by the timer."""
        return self._cycle_count

    # -------------------------------------------------------------------
    # Refresh operations
    # -------------------------------------------------------------------

    async def refresh_status(self) -> RefreshResult:
        return await self._refresh(PanelName.STATUS)

    async def refresh_stats(self) -> RefreshResult:
        return await self._refresh(PanelName.STATS)

    async def refresh_control(self) -> RefreshResult:
        return await self._refresh(PanelName.CONTROL)

    async def refresh_all(self) -> list[RefreshResult]:
        """Refresh all three panels concurrently and wait for every one to settle.

        Never raises for a failing source. Results are returned in
        (status, stats, control) order.
        """
        names = (PanelName.STATUS, PanelName.STATS, PanelName.CONTROL)
        outcomes = await asyncio.gather(
            self.refresh_status(),
            self.refresh_stats(),
            self.refresh_control(),
            return_exceptions=True,
        )
        results: list[RefreshResult] = []
        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, BaseException):
                logger.error("Unexpected error refreshing %s panel: %r", name.value, outcome)
                results.append(RefreshResult(panel=name, ok=False, error=repr(outcome)))
            else:
                results.append(outcome)
        return results

    async def _refresh(self, name: PanelName) -> RefreshResult:
        panel = self._view.panel(name)
        self._issued[name] += 1
        seq = self._issued[name]
        if panel.state is PanelState.EMPTY:
            panel.state = PanelState.LOADING

        try:
            data = await self._client.get_json(name.path)
        except FetchError as e:
            logger.warning("Refresh of %s failed (%s): %s", name.value, e.path, e.cause)
            if seq > self._applied[name]:
                if panel.state is PanelState.DISPLAYED:
                    panel.stale = True
                elif self._issued[name] == seq:
                    panel.state = PanelState.EMPTY
            return RefreshResult(panel=name, ok=False, error=str(e))
        except BaseException:
            # Unexpected errors and cancellation propagate, but never leave a panel loading
            if panel.state is PanelState.LOADING and self._issued[name] == seq:
                panel.state = PanelState.EMPTY
            raise

        if seq < self._applied[name]:
            logger.debug(
                "Dropping superseded %s result (seq %d < %d)",
                name.value, seq, self._applied[name],
            )
            return RefreshResult(panel=name, ok=True, data=data, superseded=True)

        _RENDERERS[name](panel, data)
        panel.state = PanelState.DISPLAYED
        panel.stale = False
        self._applied[name] = seq
        return RefreshResult(panel=name, ok=True, data=data)

    # -------------------------------------------------------------------
    # Timer
    # -------------------------------------------------------------------

    def start(self) -> None:
        """Start polling: one cycle now, then one every ``interval`` seconds."""
        if self.is_running:
            return
        self._timer = asyncio.create_task(self._tick_loop(), name="panel-scheduler")
        logger.info("Polling started (every %.1fs)", self._interval)

    async def stop(self) -> None:
        """Cancel the timer and any cycles still in flight."""
        timer, self._timer = self._timer, None
        pending = [t for t in (timer, *self._cycles) if t is not None and not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._cycles.clear()
        if timer is not None:
            logger.info("Polling stopped after %d cycles", self._cycle_count)

    async def _tick_loop(self) -> None:
        while True:
            self._cycle_count += 1
            task = asyncio.create_task(
                self.refresh_all(), name=f"refresh-cycle-{self._cycle_count}"
            )
            self._cycles.add(task)
            task.add_done_callback(self._cycles.discard)
            await asyncio.sleep(self._interval)
