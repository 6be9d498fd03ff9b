"""Subcommand registry and base command class.

Example of creating a custom command:

    from loago.cli.commands import Command

    class CountCommand(Command):
        '''Print how many tasks are tracked.'''

        def __init__(self):
            super().__init__(
                name="count",
                description="Show how many tasks are tracked",
                aliases=["n"],
                usage="loago count",
            )

        def execute(self, args: list[str], app: Any) -> None:
            app.console.out(str(len(app.store)))
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from loago.cli.app import LoagoApp


class UsageError(Exception):
    """Raised when a command is invoked with bad arguments."""


class Command(ABC):
    """Base class for subcommands.

    Subclass this and override execute() to implement the command.
    """

    def __init__(
        self,
        name: str,
        description: str,
        aliases: list[str] | None = None,
        usage: str | None = None,
        examples: list[str] | None = None,
    ) -> None:
        """Initialize the command.

        Args:
            name: Command name (used as ``loago <name>``)
            description: Short description of what the command does
            aliases: Alternative names for the command
            usage: Usage string showing syntax
            examples: List of example usages
        """
        self.name = name
        self.description = description
        self.aliases = aliases or []
        self.usage = usage or f"loago {name}"
        self.examples = examples or []

    @abstractmethod
    def execute(self, args: list[str], app: "LoagoApp") -> None:
        """Execute the command.

        Args:
            args: Everything after the command name
            app: The CLI application instance

        Raises:
            UsageError: If the arguments don't fit the command
        """

    def parse_names(self, args: list[str]) -> list[str]:
        """Task names from the arguments.

        Everything after ``--`` is a name, even if it starts with a dash.

        Raises:
            UsageError: On an unknown option.
        """
        names: list[str] = []
        parts = iter(args)
        for part in parts:
            if part == "--":
                names.extend(parts)
                break
            if part.startswith("-") and part != "-":
                raise UsageError(f"Unknown option '{part}' for '{self.name}'")
            names.append(part)
        return names

    def get_help(self) -> str:
        """Get detailed help text for this command."""
        lines = [
            f"Usage: {self.usage}",
            "",
            f"  {self.description}",
        ]

        if self.aliases:
            lines.append("")
            lines.append(f"Aliases: {', '.join(self.aliases)}")

        if self.examples:
            lines.append("")
            lines.append("Examples:")
            for example in self.examples:
                lines.append(f"  {example}")

        return "\n".join(lines)


class CommandRegistry:
    """Registry for subcommands, looked up by name or alias."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """Register a command and its aliases.

        Raises:
            ValueError: If the name or an alias is already taken.
        """
        for key in [command.name, *command.aliases]:
            existing = self._commands.get(key)
            if existing is not None and existing is not command:
                raise ValueError(f"'{key}' is already registered by '{existing.name}'")
        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

    def get(self, name: str) -> Command | None:
        """Get a command by name or alias."""
        return self._commands.get(name)

    def all_commands(self) -> list[Command]:
        """All unique commands, in registration order."""
        commands: list[Command] = []
        for cmd in self._commands.values():
            if cmd not in commands:
                commands.append(cmd)
        return commands
