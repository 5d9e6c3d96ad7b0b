"""Logging setup utilities for devicepanel.

Configures logging for the entire application based on the logging
configuration settings.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from devicepanel.config.settings import LoggingConfig


def setup_logging(
    config: LoggingConfig | None = None,
    console: Console | None = None,
) -> None:
    """Configure logging for the devicepanel application.

    Sets up the package logger with the specified level, format, and
    optional file handler.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).
        console: When given, console output goes through a RichHandler
                 bound to this console so that log lines are printed
                 above a running live display instead of through it.
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger("devicepanel")
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format)

    # Console handler
    if console is not None:
        console_handler: logging.Handler = RichHandler(
            console=console, show_path=False, markup=False
        )
        console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler (optional)
    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging initialized at %s level", config.level)
