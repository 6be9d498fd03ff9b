"""Command-line interface for loago."""

from loago.cli.app import LoagoApp, main
from loago.cli.commands import Command, CommandRegistry, UsageError

__all__ = ["LoagoApp", "main", "Command", "CommandRegistry", "UsageError"]
