"""Refresh scheduling for devicepanel."""

from devicepanel.poller.scheduler import POLL_INTERVAL, PanelScheduler

__all__ = ["POLL_INTERVAL", "PanelScheduler"]
