"""Command dispatch for devicepanel."""

from devicepanel.commands.dispatcher import CommandDispatcher, UnknownCommandError

__all__ = ["CommandDispatcher", "UnknownCommandError"]
