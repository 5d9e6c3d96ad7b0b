"""Command-line interface for devicepanel.

Provides the main entry point for watching the device live, sending
commands, resetting counters, and running the device simulator.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="devicepanel",
        description="Operator console for the companion device",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/devicepanel.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("watch", help="Poll the device and show the live console")

    send_parser = subparsers.add_parser("send", help="Send a bound command to the device")
    send_parser.add_argument("identifier", type=str, help="Command identifier from the config")
    send_parser.add_argument(
        "--raw", action="store_true",
        help="Send IDENTIFIER verbatim instead of looking up its binding",
    )

    subparsers.add_parser("reset-stats", help="Reset the device's counters")
    subparsers.add_parser("commands", help="List the configured command bindings")
    subparsers.add_parser("simulate", help="Run the simulated device server")

    return parser.parse_args(argv)


def _build(settings):
    """Create the client, scheduler and dispatcher from settings."""
    from devicepanel.client.http_backend import HttpDeviceClient
    from devicepanel.commands.dispatcher import CommandDispatcher
    from devicepanel.poller.scheduler import PanelScheduler
    from devicepanel.render.panel import ConsoleView

    client = HttpDeviceClient(base_url=settings.device.base_url)
    view = ConsoleView(device_host=client.device_host)
    scheduler = PanelScheduler(client, view)
    dispatcher = CommandDispatcher(client, scheduler, settings.commands)
    return client, scheduler, dispatcher


async def _watch(settings, console: Console) -> None:
    """Poll the device until interrupted, redrawing the console on every tick."""
    from rich.live import Live

    from devicepanel.render.console import build_renderable

    client, scheduler, _ = _build(settings)
    async with client:
        with Live(
            get_renderable=lambda: build_renderable(scheduler.view),
            console=console,
            refresh_per_second=4,
        ):
            scheduler.start()
            try:
                while True:
                    await asyncio.sleep(3600)
            finally:
                await scheduler.stop()


async def _send(settings, console: Console, identifier: str, raw: bool) -> int:
    """Send one command and print the refreshed control panel."""
    from devicepanel.render.console import panel_table

    client, scheduler, dispatcher = _build(settings)
    async with client:
        if raw:
            result = await dispatcher.send_command(identifier)
        else:
            result = await dispatcher.dispatch(identifier)
    console.print(panel_table(scheduler.view.control))
    if not result.ok:
        console.print(f"[red]Command failed:[/] {escape(result.error or '')}")
        return 1
    return 0


async def _reset_stats(settings, console: Console) -> int:
    """Reset counters and print every panel."""
    from devicepanel.render.console import build_renderable

    client, scheduler, dispatcher = _build(settings)
    async with client:
        result = await dispatcher.reset_stats()
    console.print(build_renderable(scheduler.view))
    if not result.ok:
        console.print(f"[red]Reset failed:[/] {escape(result.error or '')}")
        return 1
    return 0


def _list_commands(settings, console: Console) -> None:
    from rich.table import Table

    from devicepanel.config.settings import RESET_STATS_ID

    table = Table(title="Command bindings")
    table.add_column("Identifier", style="cyan")
    table.add_column("Sends", style="yellow")
    for ident, cmd in settings.commands.items():
        table.add_row(ident, cmd)
    table.add_row(RESET_STATS_ID, '{"reset": true} to /api/stats')
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the devicepanel CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from pydantic import ValidationError

    from devicepanel.commands.dispatcher import UnknownCommandError
    from devicepanel.config.settings import load_settings
    from devicepanel.utils.logging import setup_logging

    console = Console()

    try:
        settings = load_settings(args.config)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/]\n{escape(str(e))}")
        sys.exit(2)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging, console=console if args.command == "watch" else None)

    if args.command == "watch":
        logger.info("Watching device at %s", settings.device.base_url)
        try:
            asyncio.run(_watch(settings, console))
        except KeyboardInterrupt:
            logger.info("Stopped by operator")

    elif args.command == "send":
        try:
            code = asyncio.run(_send(settings, console, args.identifier, args.raw))
        except UnknownCommandError as e:
            console.print(f"[red]{escape(str(e))}[/]")
            sys.exit(2)
        sys.exit(code)

    elif args.command == "reset-stats":
        sys.exit(asyncio.run(_reset_stats(settings, console)))

    elif args.command == "commands":
        _list_commands(settings, console)

    elif args.command == "simulate":
        from devicepanel.simulator.server import main as simulate

        sim = settings.simulator
        logger.info("Starting device simulator on %s:%d", sim.host, sim.port)
        simulate(host=sim.host, port=sim.port)


if __name__ == "__main__":
    main()
